"""Celery task expiring WhatsApp conversations idle past the liveness window."""

from __future__ import annotations

from datetime import timedelta
from typing import Optional

from neuron.config import get_settings
from neuron.infra.celery_app import celery_app
from neuron.infra.logging_config import get_logger
from neuron.models.mixins import utcnow
from neuron.services.whatsapp_conversation_service import WhatsappConversationService
from neuron.utils.db.db_session_helper import db_session

logger = get_logger("conversation_expiry")


def expire_stale_conversations(
    limit: int = 500, expire_hours: Optional[int] = None
) -> int:
    """Mark idle ACTIVE conversations as EXPIRED. Returns how many changed."""
    hours = expire_hours or get_settings().conversation_expire_hours
    cutoff = utcnow() - timedelta(hours=hours)
    with db_session() as db:
        service = WhatsappConversationService(db)
        expired = service.expire_idle_before(cutoff, limit=limit)
    if expired:
        logger.info("Expired %d idle conversations", len(expired))
    return len(expired)


@celery_app.task(
    name="neuron.tasks.conversation_expiry_task.expire_stale_conversations_task"
)
def expire_stale_conversations_task(limit: int = 500) -> int:
    """
    Periodic sweep. The engine still checks expiry lazily on every inbound
    message; this only keeps silent conversations from staying ACTIVE forever.
    """
    return expire_stale_conversations(limit=limit)
