from __future__ import annotations

import threading
import time
from typing import Callable

from personapi.db.store import PersonRecord
from personapi.logging import get_logger
from personapi.paging import Page, PageRequest
from personapi.service.query import PersonQuery

logger = get_logger(__name__)


class CachedPersonQueryService:
    """Caches the ``get_all_persons`` result for ``ttl_seconds``.

    The other query operations are passed straight through. A TTL of zero
    disables caching. Callers may observe a stale list until the entry
    expires or :meth:`invalidate` is called.
    """

    def __init__(
        self,
        delegate: PersonQuery,
        *,
        ttl_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.delegate = delegate
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._entry: tuple[float, tuple[PersonRecord, ...]] | None = None

    def invalidate(self) -> None:
        with self._lock:
            self._entry = None
        logger.debug("person list cache invalidated")

    def get_all_persons(self) -> list[PersonRecord]:
        if self.ttl_seconds <= 0:
            return self.delegate.get_all_persons()

        with self._lock:
            entry = self._entry
            if entry is not None and self._clock() < entry[0]:
                return list(entry[1])

        persons = self.delegate.get_all_persons()
        with self._lock:
            self._entry = (self._clock() + self.ttl_seconds, tuple(persons))
        return persons

    def get_all_persons_pageable(self, page_request: PageRequest) -> Page[PersonRecord]:
        return self.delegate.get_all_persons_pageable(page_request)

    def get_person_by_id(self, person_id: int) -> PersonRecord:
        return self.delegate.get_person_by_id(person_id)

    def get_persons_by_gender(self, gender: str) -> list[PersonRecord]:
        return self.delegate.get_persons_by_gender(gender)
