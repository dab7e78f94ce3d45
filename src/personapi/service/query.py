from __future__ import annotations

from typing import Protocol

from personapi.db.store import MAX_SQL_INTEGER, SORTABLE_FIELDS, PersonRecord, PersonStore
from personapi.errors import InvalidPageRequest, NotFound
from personapi.logging import get_logger
from personapi.paging import Page, PageRequest

logger = get_logger(__name__)


class PersonQuery(Protocol):
    """Read operations the person routes depend on."""

    def get_all_persons(self) -> list[PersonRecord]: ...

    def get_all_persons_pageable(self, page_request: PageRequest) -> Page[PersonRecord]: ...

    def get_person_by_id(self, person_id: int) -> PersonRecord: ...

    def get_persons_by_gender(self, gender: str) -> list[PersonRecord]: ...


class PersonQueryService:
    """Facade over :class:`PersonStore` exposing the person read operations."""

    def __init__(self, store: PersonStore, *, max_page_size: int = 100):
        self.store = store
        self.max_page_size = max_page_size

    def get_all_persons(self) -> list[PersonRecord]:
        persons = self.store.list_all()
        logger.debug("loaded %d persons", len(persons))
        return persons

    def validate_page_request(self, page_request: PageRequest) -> None:
        if page_request.page < 0:
            raise InvalidPageRequest("Page index must not be less than zero")
        if page_request.size <= 0:
            raise InvalidPageRequest("Page size must be greater than zero")
        if page_request.size > self.max_page_size:
            raise InvalidPageRequest(
                f"Page size must not be greater than {self.max_page_size}"
            )
        for order in page_request.sort:
            if order.property not in SORTABLE_FIELDS:
                raise InvalidPageRequest(f"No property '{order.property}' found for type Person")
        if page_request.offset > MAX_SQL_INTEGER:
            raise InvalidPageRequest("Page index is out of range")

    def get_all_persons_pageable(self, page_request: PageRequest) -> Page[PersonRecord]:
        self.validate_page_request(page_request)
        return self.store.list_page(page_request)

    def get_person_by_id(self, person_id: int) -> PersonRecord:
        if person_id > MAX_SQL_INTEGER:
            raise NotFound.for_id(person_id)
        person = self.store.get(person_id)
        if person is None:
            raise NotFound.for_id(person_id)
        return person

    def get_persons_by_gender(self, gender: str) -> list[PersonRecord]:
        return self.store.list_by_gender(gender.strip())
