"""Brazilian phone number normalization for WhatsApp."""

from __future__ import annotations

import re

COUNTRY_CODE = "55"
_NON_DIGITS = re.compile(r"\D")
_JID_SUFFIXES = ("@c.us", "@s.whatsapp.net")


def normalize_phone_number(phone: str) -> str:
    """Digits only, with the 55 country code added to 10/11-digit local numbers.

    Idempotent: normalizing a normalized number returns it unchanged.
    """
    digits = _NON_DIGITS.sub("", phone or "")
    if digits.startswith(COUNTRY_CODE) and len(digits) >= 12:
        return digits
    if len(digits) in (10, 11):
        return COUNTRY_CODE + digits
    return digits


def strip_jid(sender: str) -> str:
    """Drop the WhatsApp JID suffix (``5521...@s.whatsapp.net`` -> ``5521...``)."""
    for suffix in _JID_SUFFIXES:
        if sender.endswith(suffix):
            return sender[: -len(suffix)]
    return sender
