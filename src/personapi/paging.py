"""Page requests and pages of query results."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from typing import Generic, Iterable, TypeVar

T = TypeVar("T")


class Direction(str, enum.Enum):
    asc = "asc"
    desc = "desc"


@dataclass(frozen=True)
class Order:
    property: str
    direction: Direction = Direction.asc

    def to_param(self) -> str:
        return f"{self.property},{self.direction.value}"


def parse_sort(values: Iterable[str] | None) -> tuple[Order, ...]:
    """Parse ``sort`` query values such as ``name,desc`` or ``name,id,asc``.

    A trailing ``asc``/``desc`` token applies to every property listed before
    it in the same value. Empty tokens are ignored.
    """

    orders: list[Order] = []
    for raw in values or ():
        tokens = [token.strip() for token in raw.split(",") if token.strip()]
        if not tokens:
            continue
        direction = Direction.asc
        if tokens[-1].lower() in {"asc", "desc"}:
            direction = Direction(tokens.pop().lower())
        orders.extend(Order(prop, direction) for prop in tokens)
    return tuple(orders)


@dataclass(frozen=True)
class PageRequest:
    page: int = 0
    size: int = 20
    sort: tuple[Order, ...] = ()

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass(frozen=True)
class Page(Generic[T]):
    content: tuple[T, ...]
    number: int
    size: int
    total_elements: int
    sort: tuple[Order, ...] = field(default=())

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_elements / self.size) if self.size else 1

    @property
    def has_next(self) -> bool:
        return self.number + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.number > 0

    @property
    def is_first(self) -> bool:
        return not self.has_previous

    @property
    def is_last(self) -> bool:
        return not self.has_next

    def __len__(self) -> int:
        return len(self.content)
