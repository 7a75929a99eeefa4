"""Fixtures for permissions, roles, users and bearer tokens."""

import pytest

from neuron.auth.passwords import hash_password
from neuron.auth.tokens import issue_access_token
from neuron.constants.permissions import (
    Action,
    Resource,
    permission_description,
    permission_key,
)
from neuron.constants.roles import ADMIN_ROLE, USER_ROLE
from neuron.models.permission import Permission
from neuron.models.role import Role
from neuron.models.user import User
from neuron.schemas.auth import TokenClaims

ADMIN_PASSWORD = "Admin@123"
USER_PASSWORD = "User@1234"


def token_for(user: User) -> str:
    return issue_access_token(
        TokenClaims(
            sub=user.id,
            email=user.email,
            role=user.role.name,
            permissions=user.role.permission_keys,
        )
    )


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
def setup_permissions(db):
    """Every (resource, action) pair."""
    permissions = [
        Permission(
            resource=resource.value,
            action=action.value,
            description=permission_description(resource, action),
        )
        for resource in Resource
        for action in Action
    ]
    db.add_all(permissions)
    db.commit()
    return {p.key: p for p in permissions}


@pytest.fixture(scope="function")
def setup_admin_role(db, setup_permissions):
    role = Role(
        name=ADMIN_ROLE,
        description="Administrador com acesso total ao sistema",
        permissions=list(setup_permissions.values()),
    )
    db.add(role)
    db.commit()
    db.refresh(role)
    return role


@pytest.fixture(scope="function")
def setup_user_role(db, setup_permissions):
    """USER role holding contacts:read and tickets:read/create."""
    keys = [
        permission_key(Resource.CONTACTS, Action.READ),
        permission_key(Resource.TICKETS, Action.READ),
        permission_key(Resource.TICKETS, Action.CREATE),
    ]
    role = Role(
        name=USER_ROLE,
        description="Usuário padrão com permissões limitadas",
        permissions=[setup_permissions[k] for k in keys],
    )
    db.add(role)
    db.commit()
    db.refresh(role)
    return role


@pytest.fixture(scope="function")
def setup_admin_user(db, setup_admin_role):
    user = User(
        name="Admin Neuron",
        email="admin@neuron.dev",
        password_hash=hash_password(ADMIN_PASSWORD),
        role_id=setup_admin_role.id,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture(scope="function")
def setup_user(db, faker, setup_user_role):
    user = User(
        name=faker.name(),
        email=faker.unique.email().lower(),
        password_hash=hash_password(USER_PASSWORD),
        role_id=setup_user_role.id,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture(scope="function")
def setup_other_user(db, faker, setup_user_role):
    user = User(
        name=faker.name(),
        email=faker.unique.email().lower(),
        password_hash=hash_password(USER_PASSWORD),
        role_id=setup_user_role.id,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture(scope="function")
def admin_headers(setup_admin_user):
    return bearer(token_for(setup_admin_user))


@pytest.fixture(scope="function")
def user_headers(setup_user):
    return bearer(token_for(setup_user))
