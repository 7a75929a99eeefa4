"""Login endpoint."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from neuron.auth.rbac import PUBLIC
from neuron.auth.turnstile import verify_turnstile_token
from neuron.db import get_db
from neuron.exceptions import SECURITY_CHECK_FAILED, ForbiddenError
from neuron.schemas.auth import LoginRequest, TokenResponse
from neuron.services.auth_service import AuthService

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
)


@router.post("/login", response_model=TokenResponse)
def login(
    data: LoginRequest,
    request: Request,
    _access=Depends(PUBLIC),
    db: Session = Depends(get_db),
) -> TokenResponse:
    """Exchange email and password for a bearer token."""
    if data.turnstile_token is not None:
        remote_ip = request.client.host if request.client else None
        if not verify_turnstile_token(data.turnstile_token, remote_ip):
            raise ForbiddenError(SECURITY_CHECK_FAILED)
    token = AuthService(db).login(data.email, data.password)
    return TokenResponse(access_token=token)
