"""Webhook command handlers."""

from neuron.commands.webhooks.whatsapp_command import WhatsappWebhookCommand

__all__ = ["WhatsappWebhookCommand"]
