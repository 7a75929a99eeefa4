"""Ticket CRUD with the owner-or-admin overlay for reads."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Query, Session

from neuron.auth.rbac import ensure_owner_or_admin, is_admin
from neuron.models.ticket import Ticket
from neuron.schemas.auth import TokenClaims
from neuron.schemas.pagination import SortParams
from neuron.schemas.ticket import TicketCreate, TicketUpdate
from neuron.services.base_service import BaseService


class TicketService(BaseService[Ticket]):
    resource_name = "Ticket"

    def __init__(self, db: Session) -> None:
        super().__init__(db, Ticket)

    def visible_query(self, claims: TokenClaims, sort: Optional[SortParams] = None) -> Query:
        """Admins see every ticket, everyone else only their own."""
        filters = None if is_admin(claims) else {"user_id": claims.sub}
        return self.list_query(sort=sort, filters=filters)

    def get_visible(self, claims: TokenClaims, ticket_id: UUID) -> Ticket:
        ticket = self.get_or_404(ticket_id)
        ensure_owner_or_admin(claims, ticket.user_id)
        return ticket

    def create_ticket(self, claims: TokenClaims, data: TicketCreate) -> Ticket:
        values = data.model_dump()
        values["user_id"] = claims.sub
        return self.create_record(values)

    def update_ticket(self, ticket_id: UUID, data: TicketUpdate) -> Ticket:
        ticket = self.get_or_404(ticket_id)
        return self.update_record(ticket, data.model_dump(exclude_unset=True))

    def delete_ticket(self, ticket_id: UUID) -> None:
        self.delete_record(self.get_or_404(ticket_id))
