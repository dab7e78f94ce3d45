# personapi/db/store.py
from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, fields
from datetime import date, datetime
from typing import Iterator

from sqlalchemy import func, select
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session

from personapi.db.connect import SessionFactory
from personapi.db.models import Person
from personapi.errors import StoreUnavailable
from personapi.logging import get_logger
from personapi.paging import Direction, Page, PageRequest

logger = get_logger(__name__)


@dataclass(frozen=True)
class PersonRecord:
    """Detached, immutable snapshot of a ``person`` row."""

    id: int
    name: str
    gender: str
    username: str | None = None
    email: str | None = None
    date_of_birth: date | None = None
    phone: str | None = None
    city: str | None = None
    country: str | None = None
    created_at: datetime | None = None
    modified_at: datetime | None = None

    @classmethod
    def from_row(cls, row: Person) -> "PersonRecord":
        return cls(**{f.name: getattr(row, f.name) for f in fields(cls)})


SORTABLE_FIELDS = frozenset(f.name for f in fields(PersonRecord))

# SQLite INTEGER is a signed 64-bit value; ids and offsets above it never bind
MAX_SQL_INTEGER = 2**63 - 1


class PersonStore:
    """Read access to ``person`` rows.

    Every call opens its own session from ``session_factory``. Driver level
    failures surface as :class:`~personapi.errors.StoreUnavailable`.
    """

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    @contextmanager
    def _session(self) -> Iterator[Session]:
        try:
            with self.session_factory() as session:
                yield session
        except DBAPIError as exc:
            logger.error("person store unavailable: %s", exc)
            raise StoreUnavailable("Person store is unavailable") from exc

    def get(self, person_id: int) -> PersonRecord | None:
        with self._session() as session:
            row = session.get(Person, person_id)
            return PersonRecord.from_row(row) if row is not None else None

    def list_all(self) -> list[PersonRecord]:
        with self._session() as session:
            rows = session.scalars(select(Person).order_by(Person.id.asc())).all()
            return [PersonRecord.from_row(r) for r in rows]

    def list_by_gender(self, gender: str) -> list[PersonRecord]:
        stmt = (
            select(Person)
            .where(func.casefold(Person.gender) == gender.casefold())
            .order_by(Person.id.asc())
        )
        with self._session() as session:
            return [PersonRecord.from_row(r) for r in session.scalars(stmt).all()]

    def count(self) -> int:
        with self._session() as session:
            return session.scalar(select(func.count()).select_from(Person)) or 0

    def list_page(self, request: PageRequest) -> Page[PersonRecord]:
        stmt = select(Person)
        for order in request.sort:
            column = getattr(Person, order.property)
            stmt = stmt.order_by(column.desc() if order.direction is Direction.desc else column.asc())
        # id as the final tie-breaker keeps pages disjoint
        stmt = stmt.order_by(Person.id.asc()).offset(request.offset).limit(request.size)

        with self._session() as session:
            total = session.scalar(select(func.count()).select_from(Person)) or 0
            rows = session.scalars(stmt).all()
            content = tuple(PersonRecord.from_row(r) for r in rows)

        return Page(
            content=content,
            number=request.page,
            size=request.size,
            total_elements=total,
            sort=request.sort,
        )
