"""Resources and actions that make up permission keys."""

from enum import StrEnum


class Resource(StrEnum):
    """Protected resources."""

    CONTACTS = "contacts"
    USERS = "users"
    ROLES = "roles"
    PERMISSIONS = "permissions"
    TICKETS = "tickets"
    WHATSAPP_CONVERSATIONS = "whatsapp_conversations"


class Action(StrEnum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


def permission_key(resource: str, action: str) -> str:
    """Exact-match key carried in tokens, e.g. ``contacts:read``."""
    return f"{resource}:{action}"


_RESOURCE_LABELS = {
    Resource.CONTACTS: "contatos",
    Resource.USERS: "usuários",
    Resource.ROLES: "roles",
    Resource.PERMISSIONS: "permissões",
    Resource.TICKETS: "tickets",
    Resource.WHATSAPP_CONVERSATIONS: "conversas do WhatsApp",
}

_ACTION_VERBS = {
    Action.CREATE: "criar",
    Action.READ: "visualizar",
    Action.UPDATE: "atualizar",
    Action.DELETE: "remover",
}


def permission_description(resource: Resource, action: Action) -> str:
    return f"Permite {_ACTION_VERBS[action]} {_RESOURCE_LABELS[resource]}"
