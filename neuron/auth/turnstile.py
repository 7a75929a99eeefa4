"""Cloudflare Turnstile verification for the login form."""

from __future__ import annotations

from typing import Optional

import requests

from neuron.config import get_settings
from neuron.infra.logging_config import get_logger

VERIFY_URL = "https://challenges.cloudflare.com/turnstile/v0/siteverify"
VERIFY_TIMEOUT_SECONDS = 10

logger = get_logger(__name__)


def verify_turnstile_token(token: str, remote_ip: Optional[str] = None) -> bool:
    """Return True when the token is accepted or no secret is configured."""
    secret = get_settings().turnstile_secret_key
    if not secret:
        return True
    payload = {"secret": secret, "response": token}
    if remote_ip:
        payload["remoteip"] = remote_ip
    try:
        response = requests.post(VERIFY_URL, json=payload, timeout=VERIFY_TIMEOUT_SECONDS)
        response.raise_for_status()
        data = response.json()
    except (requests.RequestException, ValueError) as e:
        logger.warning("Turnstile verification request failed: %s", e)
        return False
    return data.get("success") is True
