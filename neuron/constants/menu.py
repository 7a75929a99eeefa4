"""Static sidebar definition filtered per caller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from neuron.constants.permissions import Action, Resource, permission_key


@dataclass(frozen=True)
class SidebarItem:
    label: str
    slug: str
    icon: str
    required_permission: Optional[str] = None


SIDEBAR_ITEMS: tuple[SidebarItem, ...] = (
    SidebarItem(label="Dashboard", slug="dashboard", icon="layout-dashboard"),
    SidebarItem(
        label="Tickets",
        slug="tickets",
        icon="ticket",
        required_permission=permission_key(Resource.TICKETS, Action.READ),
    ),
    SidebarItem(
        label="Contatos",
        slug="contacts",
        icon="contact",
        required_permission=permission_key(Resource.CONTACTS, Action.READ),
    ),
    SidebarItem(
        label="Usuários",
        slug="users",
        icon="users",
        required_permission=permission_key(Resource.USERS, Action.READ),
    ),
    SidebarItem(
        label="Roles",
        slug="roles",
        icon="shield",
        required_permission=permission_key(Resource.ROLES, Action.READ),
    ),
    SidebarItem(
        label="Permissões",
        slug="permissions",
        icon="lock",
        required_permission=permission_key(Resource.PERMISSIONS, Action.READ),
    ),
)
