"""Tickets API. Non-admin callers only see their own tickets."""

from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi_pagination import Page, Params
from fastapi_pagination.ext.sqlalchemy import paginate
from sqlalchemy.orm import Session

from neuron.auth.rbac import build_rbac_dependencies
from neuron.constants.permissions import Resource
from neuron.db import get_db
from neuron.schemas.auth import TokenClaims
from neuron.schemas.pagination import SortParams, sort_params
from neuron.schemas.ticket import TicketCreate, TicketRead, TicketUpdate
from neuron.services.ticket_service import TicketService

router = APIRouter(
    prefix="/tickets",
    tags=["tickets"],
    responses={404: {"description": "Not found"}},
)

rbac = build_rbac_dependencies(Resource.TICKETS)


@router.get("", response_model=Page[TicketRead])
def list_tickets(
    params: Params = Depends(),
    sort: SortParams = Depends(sort_params),
    claims: TokenClaims = Depends(rbac["read"]),
    db: Session = Depends(get_db),
) -> Page[TicketRead]:
    """List tickets: all of them for ADMIN, the caller's own otherwise."""
    query = TicketService(db).visible_query(claims, sort=sort)
    return paginate(query, params=params)


@router.post("", response_model=TicketRead, status_code=201)
def create_ticket(
    data: TicketCreate,
    claims: TokenClaims = Depends(rbac["create"]),
    db: Session = Depends(get_db),
) -> TicketRead:
    """Open a ticket owned by the caller."""
    return TicketService(db).create_ticket(claims, data)


@router.get("/{ticket_id}", response_model=TicketRead)
def get_ticket(
    ticket_id: UUID,
    claims: TokenClaims = Depends(rbac["read"]),
    db: Session = Depends(get_db),
) -> TicketRead:
    return TicketService(db).get_visible(claims, ticket_id)


@router.patch("/{ticket_id}", response_model=TicketRead)
def update_ticket(
    ticket_id: UUID,
    data: TicketUpdate,
    _claims=Depends(rbac["update"]),
    db: Session = Depends(get_db),
) -> TicketRead:
    return TicketService(db).update_ticket(ticket_id, data)


@router.delete("/{ticket_id}", status_code=204)
def delete_ticket(
    ticket_id: UUID,
    _claims=Depends(rbac["delete"]),
    db: Session = Depends(get_db),
) -> None:
    TicketService(db).delete_ticket(ticket_id)
