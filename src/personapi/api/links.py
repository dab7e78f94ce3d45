"""Hypermedia link building.

Everything here is a pure function of its arguments: a route template plus
parameters becomes a URL string, and a :class:`~personapi.paging.Page`
becomes its navigation links.
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence
from urllib.parse import quote, urlencode

from personapi.paging import Order, Page


class ResourcePaths:
    """Route templates relative to the person resource root."""

    ROOT = ""
    PAGEABLE = "/page"
    ID = "/{id}"
    GENDER = "/gender/{gender}"


def expand(template: str, **params: Any) -> str:
    """Substitute ``{name}`` placeholders with URL-quoted parameter values."""

    path = template
    for name, value in params.items():
        path = path.replace("{" + name + "}", quote(str(value), safe=""))
    return path


def link_to(
    base_url: str,
    root: str,
    template: str = ResourcePaths.ROOT,
    *,
    query: Sequence[tuple[str, Any]] | None = None,
    **params: Any,
) -> str:
    """Return the absolute URL for ``template`` under ``root``."""

    href = base_url.rstrip("/") + root + expand(template, **params)
    if query:
        href += "?" + urlencode(list(query))
    return href


def link(href: str) -> dict[str, str]:
    return {"href": href}


def page_query(number: int, size: int, sort: Iterable[Order] = ()) -> list[tuple[str, Any]]:
    query: list[tuple[str, Any]] = [("page", number), ("size", size)]
    query.extend(("sort", order.to_param()) for order in sort)
    return query


def page_links(page: Page, base_url: str, root: str) -> dict[str, dict[str, str]]:
    """Navigation links for ``page``.

    ``self`` is always present. ``first`` and ``last`` are added when there is
    somewhere to navigate to, ``prev`` and ``next`` when those pages exist.
    """

    def href(number: int) -> str:
        return link_to(
            base_url,
            root,
            ResourcePaths.PAGEABLE,
            query=page_query(number, page.size, page.sort),
        )

    navigable = page.has_previous or page.has_next
    links: dict[str, dict[str, str]] = {}
    if navigable:
        links["first"] = link(href(0))
    if page.has_previous:
        links["prev"] = link(href(page.number - 1))
    links["self"] = link(href(page.number))
    if page.has_next:
        links["next"] = link(href(page.number + 1))
    if navigable:
        links["last"] = link(href(max(page.total_pages - 1, 0)))
    return links
