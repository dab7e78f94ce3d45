"""Read-only person endpoints.

Every handler hands off to a :class:`~personapi.service.query.PersonQuery`
and shapes the result with a :class:`PersonModelAssembler`. Both are
constructor arguments of :func:`build_person_router`.
"""

from __future__ import annotations

from typing import Any, Callable

from fastapi import APIRouter, Depends, Header, Path, Query, Request, Response

from personapi.api.assembler import PersonModelAssembler
from personapi.api.links import ResourcePaths, link_to
from personapi.api.security import require_permission
from personapi.config import Settings
from personapi.db.models import Permission, UserRole
from personapi.paging import PageRequest, parse_sort
from personapi.service.query import PersonQuery

HEADER_PERSON_API_VERSION = "X-PERSON-API-VERSION"
HEADER_API_KEY = "X-API-KEY"

READ_ROLES = (UserRole.admin, UserRole.person)


def build_person_router(
    query: PersonQuery,
    assembler: PersonModelAssembler,
    settings: Settings,
    *,
    guard: Callable[..., Any] | None = None,
) -> APIRouter:
    """Return the person query router, to be mounted at ``settings.resource_root``."""

    if guard is None:
        guard = require_permission(
            *READ_ROLES,
            permission=Permission.person_read,
            enabled=settings.require_login,
        )

    def echo_api_headers(
        response: Response,
        api_version: str | None = Header(default=None, alias=HEADER_PERSON_API_VERSION),
        api_key: str | None = Header(default=None, alias=HEADER_API_KEY),
    ) -> None:
        response.headers[HEADER_PERSON_API_VERSION] = api_version or settings.api_version
        response.headers[HEADER_API_KEY] = api_key or settings.api_key

    router = APIRouter(
        tags=["Person Query"],
        dependencies=[Depends(guard), Depends(echo_api_headers)],
    )

    def base_url(request: Request) -> str:
        return str(request.base_url)

    @router.get("", summary="Find all persons")
    @router.get("/", summary="Find all persons")
    def get_all_persons(request: Request) -> dict[str, Any]:
        """Return every person in the store."""

        url = base_url(request)
        return assembler.to_collection_model(
            query.get_all_persons(),
            url,
            self_href=assembler.collection_href(url),
        )

    @router.get(ResourcePaths.PAGEABLE, summary="Find all persons via paging")
    def get_all_persons_pageable(
        request: Request,
        page: int = Query(default=0),
        size: int | None = Query(default=None),
        sort: list[str] | None = Query(default=None),
    ) -> dict[str, Any]:
        page_request = PageRequest(
            page=page,
            size=settings.default_page_size if size is None else size,
            sort=parse_sort(sort),
        )
        result = query.get_all_persons_pageable(page_request)
        return assembler.to_paged_model(result, base_url(request))

    @router.get(ResourcePaths.GENDER, summary="Find all persons based on gender")
    def get_persons_by_gender(
        request: Request,
        gender: str = Path(min_length=1),
    ) -> dict[str, Any]:
        url = base_url(request)
        return assembler.to_collection_model(
            query.get_persons_by_gender(gender),
            url,
            self_href=link_to(url, assembler.resource_root, ResourcePaths.GENDER, gender=gender),
        )

    @router.get(ResourcePaths.ID, summary="Find person by ID")
    def get_person_by_id(request: Request, id: int = Path(gt=0)) -> dict[str, Any]:
        return assembler.to_model(query.get_person_by_id(id), base_url(request))

    return router
