"""Celery application for background sweeps."""

from celery import Celery

from neuron.config import get_settings

settings = get_settings()

celery_app = Celery(
    "neuron",
    broker=settings.celery_broker_url,
    backend=settings.celery_broker_url,
    include=["neuron.tasks.conversation_expiry_task"],
)

celery_app.conf.update(
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    timezone="UTC",
    enable_utc=True,
    beat_schedule={
        "expire-stale-conversations": {
            "task": "neuron.tasks.conversation_expiry_task.expire_stale_conversations_task",
            "schedule": settings.conversation_sweep_interval_minutes * 60.0,
        },
    },
)
