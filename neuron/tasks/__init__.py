# Import celery app first
from neuron.infra.celery_app import celery_app

# Initialize logging configuration for Celery workers
from neuron.infra.logging_config import LoggingConfig
from neuron.tasks.conversation_expiry_task import expire_stale_conversations_task

LoggingConfig()  # Initialize logging

__all__ = [
    "celery_app",
    "expire_stale_conversations_task",
]
