"""Credential check and token issue."""

from __future__ import annotations

from sqlalchemy.orm import Session

from neuron.auth.passwords import dummy_password_hash, verify_password
from neuron.auth.tokens import issue_access_token
from neuron.exceptions import InvalidCredentialsError
from neuron.infra.logging_config import get_logger
from neuron.schemas.auth import TokenClaims
from neuron.services.user_service import UserService

logger = get_logger(__name__)


class AuthService:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.user_service = UserService(db)

    def login(self, email: str, password: str) -> str:
        """Return a signed access token carrying the role's current permissions.

        Unknown email, inactive user and wrong password all raise the same
        InvalidCredentialsError.
        """
        user = self.user_service.get_by_email(email)
        if user is None:
            verify_password(password, dummy_password_hash())
            raise InvalidCredentialsError()
        password_ok = verify_password(password, user.password_hash)
        if not password_ok or not user.is_active:
            logger.info("Rejected login for user %s", user.id)
            raise InvalidCredentialsError()

        claims = TokenClaims(
            sub=user.id,
            email=user.email,
            role=user.role.name,
            permissions=user.role.permission_keys,
        )
        return issue_access_token(claims)
