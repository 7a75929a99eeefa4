"""Session scope for code running outside a request (tasks, event handlers)."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session

from neuron.db import db_manager


@contextmanager
def db_session() -> Iterator[Session]:
    with db_manager.db_session() as db:
        yield db
