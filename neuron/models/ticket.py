"""Ticket model, owned by exactly one user."""

from __future__ import annotations

import uuid

from sqlalchemy import JSON, Column, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from neuron.constants.tickets import TicketPriority, TicketStatus
from neuron.db import Base
from neuron.models.mixins import TimestampMixin


class Ticket(Base, TimestampMixin):
    __tablename__ = "tickets"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    priority = Column(String(16), nullable=False, default=TicketPriority.MEDIUM.value)
    status = Column(String(16), nullable=False, default=TicketStatus.OPEN.value)
    links = Column(JSON, nullable=True)
    user_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    user = relationship("User", back_populates="tickets")
