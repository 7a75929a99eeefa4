"""Users API."""

from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi_pagination import Page, Params
from fastapi_pagination.ext.sqlalchemy import paginate
from sqlalchemy.orm import Session

from neuron.auth.rbac import build_rbac_dependencies
from neuron.constants.permissions import Resource
from neuron.db import get_db
from neuron.schemas.pagination import SortParams, sort_params
from neuron.schemas.user import UserCreate, UserRead, UserUpdate
from neuron.services.user_service import UserService

router = APIRouter(
    prefix="/users",
    tags=["users"],
    responses={404: {"description": "Not found"}},
)

rbac = build_rbac_dependencies(Resource.USERS)


@router.get("", response_model=Page[UserRead])
def list_users(
    params: Params = Depends(),
    sort: SortParams = Depends(sort_params),
    _claims=Depends(rbac["read"]),
    db: Session = Depends(get_db),
) -> Page[UserRead]:
    """List users with pagination."""
    query = UserService(db).list_query(sort=sort)
    return paginate(query, params=params)


@router.post("", response_model=UserRead, status_code=201)
def create_user(
    data: UserCreate,
    _claims=Depends(rbac["create"]),
    db: Session = Depends(get_db),
) -> UserRead:
    """Create a user. Without role_id the USER role is assigned."""
    return UserService(db).create_user(data)


@router.get("/{user_id}", response_model=UserRead)
def get_user(
    user_id: UUID,
    _claims=Depends(rbac["read"]),
    db: Session = Depends(get_db),
) -> UserRead:
    return UserService(db).get_or_404(user_id)


@router.patch("/{user_id}", response_model=UserRead)
def update_user(
    user_id: UUID,
    data: UserUpdate,
    _claims=Depends(rbac["update"]),
    db: Session = Depends(get_db),
) -> UserRead:
    return UserService(db).update_user(user_id, data)


@router.delete("/{user_id}", status_code=204)
def delete_user(
    user_id: UUID,
    _claims=Depends(rbac["delete"]),
    db: Session = Depends(get_db),
) -> None:
    UserService(db).delete_user(user_id)
