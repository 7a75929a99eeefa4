"""Contact model: leads submitted through the public contact form."""

from __future__ import annotations

import uuid

from sqlalchemy import Column, String, Text, Uuid

from neuron.db import Base
from neuron.models.mixins import TimestampMixin


class Contact(Base, TimestampMixin):
    __tablename__ = "contacts"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    phone = Column(String(32), nullable=True)
    description = Column(Text, nullable=False)
