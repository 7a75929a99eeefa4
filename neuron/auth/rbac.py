"""
Per-route access declarations and the authorization decision.

Every route carries exactly one AccessRule through an AccessGuard
dependency. The decision order is fixed: public routes skip token
verification; otherwise the bearer token must verify (401), and a declared
permission must be present in the token's permission snapshot (403).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional
from uuid import UUID

from fastapi import Depends, FastAPI
from fastapi.routing import APIRoute
from starlette.routing import BaseRoute, Mount
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from neuron.config import Settings
from neuron.constants.permissions import Action, Resource, permission_key
from neuron.constants.roles import ADMIN_ROLE
from neuron.exceptions import TOKEN_MISSING, ForbiddenError, UnauthenticatedError
from neuron.auth.tokens import decode_access_token
from neuron.schemas.auth import TokenClaims

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AccessRule:
    """Route table entry: a required (resource, action) pair and/or public flag."""

    permission: Optional[tuple[Resource, Action]] = None
    public: bool = False

    @property
    def permission_key(self) -> Optional[str]:
        if self.permission is None:
            return None
        resource, action = self.permission
        return permission_key(resource, action)


def authorize(
    rule: AccessRule, token: Optional[str], settings: Optional[Settings] = None
) -> Optional[TokenClaims]:
    """Decide access for one request. Returns the caller's claims (None when public)."""
    if rule.public:
        return None
    if not token:
        raise UnauthenticatedError(TOKEN_MISSING)
    claims = decode_access_token(token, settings)
    required = rule.permission_key
    if required is None:
        return claims
    if not claims.has_permission(required):
        raise ForbiddenError()
    return claims


class AccessGuard:
    """FastAPI dependency enforcing one AccessRule."""

    def __init__(self, rule: AccessRule) -> None:
        self.rule = rule

    def __call__(
        self,
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    ) -> Optional[TokenClaims]:
        token = credentials.credentials if credentials else None
        return authorize(self.rule, token)

    def __repr__(self) -> str:
        return f"AccessGuard({self.rule!r})"


PUBLIC = AccessGuard(AccessRule(public=True))
AUTHENTICATED = AccessGuard(AccessRule())


def build_rbac_dependencies(resource: Resource) -> dict[str, AccessGuard]:
    """One guard per action, keyed by action name ("read", "create", ...)."""
    return {
        action.value: AccessGuard(AccessRule(permission=(resource, action)))
        for action in Action
    }


# -----------------------------------------------------------------------------
# Ownership overlay (tickets)
# -----------------------------------------------------------------------------


def is_admin(claims: TokenClaims) -> bool:
    return claims.role == ADMIN_ROLE


def ensure_owner_or_admin(claims: TokenClaims, owner_id: UUID) -> None:
    """Non-admin callers may only touch records they own."""
    if is_admin(claims):
        return
    if owner_id != claims.sub:
        raise ForbiddenError()


# -----------------------------------------------------------------------------
# Route table
# -----------------------------------------------------------------------------


def _route_guard(route: APIRoute) -> Optional[AccessGuard]:
    for dependency in route.dependant.dependencies:
        if isinstance(dependency.call, AccessGuard):
            return dependency.call
    return None


def _api_routes(
    routes: Iterable[BaseRoute], prefix: str = ""
) -> Iterator[tuple[str, APIRoute]]:
    """Flatten included routers and mounts down to their API routes."""
    for route in routes:
        if isinstance(route, APIRoute):
            yield prefix + route.path, route
            continue
        # Newer FastAPI keeps included routers as wrappers around the original
        included = getattr(route, "original_router", None)
        if included is not None:
            yield from _api_routes(included.routes, prefix)
        elif isinstance(route, Mount):
            yield from _api_routes(route.routes, prefix + route.path)


def access_table(app: FastAPI) -> Iterator[tuple[str, str, Optional[AccessRule]]]:
    """Yield (method, path, rule) for every API route; rule is None when undeclared."""
    for path, route in _api_routes(app.routes):
        guard = _route_guard(route)
        for method in sorted(route.methods):
            yield method, path, guard.rule if guard else None


def ensure_access_declared(app: FastAPI) -> None:
    """Refuse to build an app that exposes a route without an access rule."""
    undeclared = [
        f"{method} {path}" for method, path, rule in access_table(app) if rule is None
    ]
    if undeclared:
        raise RuntimeError(
            "Routes without an access declaration: " + ", ".join(undeclared)
        )
