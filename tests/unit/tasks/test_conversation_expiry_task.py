"""Tests for the conversation expiry sweep."""

from datetime import timedelta

from neuron.constants.whatsapp import ConversationStatus
from neuron.models.mixins import utcnow
from neuron.tasks.conversation_expiry_task import expire_stale_conversations


def test_sweep_expires_only_idle_conversations(db, setup_stale_conversation):
    assert expire_stale_conversations(expire_hours=24) == 1
    db.refresh(setup_stale_conversation)
    assert setup_stale_conversation.status == ConversationStatus.EXPIRED.value


def test_sweep_keeps_recent_conversations(db, setup_conversation):
    assert expire_stale_conversations(expire_hours=24) == 0
    db.refresh(setup_conversation)
    assert setup_conversation.status == ConversationStatus.ACTIVE.value


def test_sweep_ignores_finished_conversations(db, setup_stale_conversation):
    setup_stale_conversation.status = ConversationStatus.COMPLETED.value
    setup_stale_conversation.updated_at = utcnow() - timedelta(hours=30)
    db.commit()
    assert expire_stale_conversations(expire_hours=24) == 0
