"""Command to seed permissions, roles, users, contacts and sample tickets."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from neuron.auth.passwords import hash_password
from neuron.constants.permissions import (
    Action,
    Resource,
    permission_description,
    permission_key,
)
from neuron.constants.roles import ADMIN_ROLE, USER_ROLE
from neuron.constants.tickets import TicketPriority, TicketStatus
from neuron.models.contact import Contact
from neuron.models.permission import Permission
from neuron.models.role import Role
from neuron.models.ticket import Ticket
from neuron.models.user import User

ROLES = {
    ADMIN_ROLE: "Administrador com acesso total ao sistema",
    USER_ROLE: "Usuário padrão com permissões limitadas",
}
USER_ROLE_PERMISSIONS = [(Resource.CONTACTS, Action.READ)]

ADMIN_EMAIL = "admin@neuron.dev"
REGULAR_EMAIL = "ivan@neuron.dev"


@dataclass(frozen=True)
class SeedUser:
    name: str
    email: str
    password: str
    role: str
    is_active: bool = True


USERS = [
    SeedUser("Admin Neuron", ADMIN_EMAIL, "Admin@123", ADMIN_ROLE),
    SeedUser("Ivan Reis", REGULAR_EMAIL, "User@1234", USER_ROLE),
    SeedUser("Maria Silva", "maria@email.com", "User@1234", USER_ROLE, False),
]

CONTACTS = [
    {
        "name": "Ivan Reis",
        "email": "ivan@neuron.dev",
        "phone": "+55 11 99999-0001",
        "description": "Desenvolvedor full-stack com experiência em NestJS e React.",
    },
    {
        "name": "Maria Silva",
        "email": "maria@email.com",
        "phone": None,
        "description": "Interessada em colaboração para projetos open source.",
    },
    {
        "name": "João Santos",
        "email": "joao@empresa.com.br",
        "phone": "+55 21 98888-0002",
        "description": "Proposta comercial para desenvolvimento de API.",
    },
]

TICKETS = [
    {
        "title": "Erro ao carregar dashboard",
        "description": "O dashboard não carrega os gráficos de desempenho após o login.",
        "priority": TicketPriority.HIGH,
        "status": TicketStatus.OPEN,
        "links": ["https://exemplo.com/logs/dashboard-error.txt"],
        "owner": REGULAR_EMAIL,
    },
    {
        "title": "Botão de exportação não funciona",
        "description": "Ao clicar no botão de exportar relatório em PDF, nada acontece.",
        "priority": TicketPriority.MEDIUM,
        "status": TicketStatus.IN_PROGRESS,
        "links": None,
        "owner": REGULAR_EMAIL,
    },
    {
        "title": "Atualizar dependências do projeto",
        "description": (
            "Atualizar todas as dependências do projeto para as versões mais recentes."
        ),
        "priority": TicketPriority.LOW,
        "status": TicketStatus.OPEN,
        "links": [
            "https://exemplo.com/docs/upgrade-guide.md",
            "https://exemplo.com/changelog.md",
        ],
        "owner": ADMIN_EMAIL,
    },
    {
        "title": "Sistema fora do ar em produção",
        "description": (
            "O servidor de produção retorna erro 502 Bad Gateway para todas as "
            "requisições."
        ),
        "priority": TicketPriority.URGENT,
        "status": TicketStatus.OPEN,
        "links": ["https://exemplo.com/monitoring/incident-001.png"],
        "owner": ADMIN_EMAIL,
    },
    {
        "title": "Melhoria no formulário de contato",
        "description": (
            "Adicionar validação de telefone no formulário de contato do portfólio."
        ),
        "priority": TicketPriority.LOW,
        "status": TicketStatus.CLOSED,
        "links": None,
        "owner": REGULAR_EMAIL,
    },
]


class SeedDatabaseCommand:
    """
    Idempotent seed: rows are matched by natural key (permission pair, role
    name, user email, contact email) and only missing ones are inserted.
    Tickets are created only when the table is empty.
    """

    def __init__(self, db: Session) -> None:
        self.db = db
        self.logger = logging.getLogger(__name__)

    def execute(self) -> None:
        permissions = self._seed_permissions()
        roles = self._seed_roles(permissions)
        users = self._seed_users(roles)
        self._seed_contacts()
        self._seed_tickets(users)
        self.db.commit()
        self.logger.info("Database seed finished")

    def _seed_permissions(self) -> Dict[str, Permission]:
        existing = {p.key: p for p in self.db.query(Permission).all()}
        for resource in Resource:
            for action in Action:
                key = permission_key(resource, action)
                if key in existing:
                    continue
                permission = Permission(
                    resource=resource.value,
                    action=action.value,
                    description=permission_description(resource, action),
                )
                self.db.add(permission)
                existing[key] = permission
        self.db.flush()
        return existing

    def _seed_roles(self, permissions: Dict[str, Permission]) -> Dict[str, Role]:
        user_keys = {permission_key(r, a) for r, a in USER_ROLE_PERMISSIONS}
        grants: Dict[str, List[Permission]] = {
            ADMIN_ROLE: list(permissions.values()),
            USER_ROLE: [p for key, p in permissions.items() if key in user_keys],
        }
        roles: Dict[str, Role] = {}
        for name, description in ROLES.items():
            role = self.db.query(Role).filter(Role.name == name).first()
            if role is None:
                role = Role(
                    name=name,
                    description=description,
                    is_active=True,
                    permissions=grants[name],
                )
                self.db.add(role)
            elif name == ADMIN_ROLE:
                # ADMIN always holds every permission, including newly added ones
                role.permissions = grants[name]
            roles[name] = role
        self.db.flush()
        return roles

    def _seed_users(self, roles: Dict[str, Role]) -> Dict[str, User]:
        users: Dict[str, User] = {}
        for seed in USERS:
            user = self.db.query(User).filter(User.email == seed.email).first()
            if user is None:
                user = User(
                    name=seed.name,
                    email=seed.email,
                    password_hash=hash_password(seed.password),
                    is_active=seed.is_active,
                    role_id=roles[seed.role].id,
                )
                self.db.add(user)
            users[seed.email] = user
        self.db.flush()
        return users

    def _seed_contacts(self) -> None:
        for values in CONTACTS:
            found: Optional[Contact] = (
                self.db.query(Contact).filter(Contact.email == values["email"]).first()
            )
            if found is None:
                self.db.add(Contact(**values))

    def _seed_tickets(self, users: Dict[str, User]) -> None:
        if self.db.query(Ticket).count() > 0:
            return
        for values in TICKETS:
            values = dict(values)
            owner = users[values.pop("owner")]
            self.db.add(
                Ticket(
                    title=values["title"],
                    description=values["description"],
                    priority=values["priority"].value,
                    status=values["status"].value,
                    links=values["links"],
                    user_id=owner.id,
                )
            )
