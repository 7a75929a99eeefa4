from neuron.models.contact import Contact
from neuron.models.permission import Permission
from neuron.models.role import Role, role_permissions
from neuron.models.ticket import Ticket
from neuron.models.user import User
from neuron.models.whatsapp_conversation import WhatsappConversation
from neuron.models.whatsapp_message import WhatsappMessage

__all__ = [
    "Contact",
    "Permission",
    "Role",
    "Ticket",
    "User",
    "WhatsappConversation",
    "WhatsappMessage",
    "role_permissions",
]
