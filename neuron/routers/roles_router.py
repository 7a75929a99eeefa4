"""Roles API."""

from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi_pagination import Page, Params
from fastapi_pagination.ext.sqlalchemy import paginate
from sqlalchemy.orm import Session

from neuron.auth.rbac import build_rbac_dependencies
from neuron.constants.permissions import Resource
from neuron.db import get_db
from neuron.schemas.pagination import SortParams, sort_params
from neuron.schemas.role import RoleCreate, RoleRead, RoleUpdate
from neuron.services.role_service import RoleService

router = APIRouter(
    prefix="/roles",
    tags=["roles"],
    responses={404: {"description": "Not found"}},
)

rbac = build_rbac_dependencies(Resource.ROLES)


@router.get("", response_model=Page[RoleRead])
def list_roles(
    params: Params = Depends(),
    sort: SortParams = Depends(sort_params),
    _claims=Depends(rbac["read"]),
    db: Session = Depends(get_db),
) -> Page[RoleRead]:
    """List roles with their permissions."""
    query = RoleService(db).list_query(sort=sort)
    return paginate(query, params=params)


@router.post("", response_model=RoleRead, status_code=201)
def create_role(
    data: RoleCreate,
    _claims=Depends(rbac["create"]),
    db: Session = Depends(get_db),
) -> RoleRead:
    return RoleService(db).create_role(data)


@router.get("/{role_id}", response_model=RoleRead)
def get_role(
    role_id: UUID,
    _claims=Depends(rbac["read"]),
    db: Session = Depends(get_db),
) -> RoleRead:
    return RoleService(db).get_or_404(role_id)


@router.patch("/{role_id}", response_model=RoleRead)
def update_role(
    role_id: UUID,
    data: RoleUpdate,
    _claims=Depends(rbac["update"]),
    db: Session = Depends(get_db),
) -> RoleRead:
    """Update a role. permission_ids, when sent, replaces the permission set."""
    return RoleService(db).update_role(role_id, data)


@router.delete("/{role_id}", status_code=204)
def delete_role(
    role_id: UUID,
    _claims=Depends(rbac["delete"]),
    db: Session = Depends(get_db),
) -> None:
    """Delete a role. Refused with 409 while users still reference it."""
    RoleService(db).delete_role(role_id)
