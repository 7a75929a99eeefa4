"""Permissions API (read-only; permissions come from the seed)."""

from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi_pagination import Page, Params
from fastapi_pagination.ext.sqlalchemy import paginate
from sqlalchemy.orm import Session

from neuron.auth.rbac import build_rbac_dependencies
from neuron.constants.permissions import Resource
from neuron.db import get_db
from neuron.schemas.pagination import SortParams, sort_params
from neuron.schemas.permission import PermissionRead
from neuron.services.permission_service import PermissionService

router = APIRouter(
    prefix="/permissions",
    tags=["permissions"],
    responses={404: {"description": "Not found"}},
)

rbac = build_rbac_dependencies(Resource.PERMISSIONS)


@router.get("", response_model=Page[PermissionRead])
def list_permissions(
    params: Params = Depends(),
    sort: SortParams = Depends(sort_params),
    _claims=Depends(rbac["read"]),
    db: Session = Depends(get_db),
) -> Page[PermissionRead]:
    query = PermissionService(db).list_query(sort=sort)
    return paginate(query, params=params)


@router.get("/{permission_id}", response_model=PermissionRead)
def get_permission(
    permission_id: UUID,
    _claims=Depends(rbac["read"]),
    db: Session = Depends(get_db),
) -> PermissionRead:
    return PermissionService(db).get_or_404(permission_id)
