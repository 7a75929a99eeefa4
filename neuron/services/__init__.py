from neuron.services.auth_service import AuthService
from neuron.services.contact_service import ContactService
from neuron.services.menu_service import MenuService
from neuron.services.permission_service import PermissionService
from neuron.services.role_service import RoleService
from neuron.services.ticket_service import TicketService
from neuron.services.user_service import UserService
from neuron.services.whatsapp_conversation_service import WhatsappConversationService
from neuron.services.whatsapp_message_service import WhatsappMessageService

__all__ = [
    "AuthService",
    "ContactService",
    "MenuService",
    "PermissionService",
    "RoleService",
    "TicketService",
    "UserService",
    "WhatsappConversationService",
    "WhatsappMessageService",
]
