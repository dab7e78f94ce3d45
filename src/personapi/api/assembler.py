from __future__ import annotations

from typing import Any, Iterable

from personapi.api.links import ResourcePaths, link, link_to, page_links
from personapi.api.schemas import PersonOut
from personapi.db.store import PersonRecord
from personapi.paging import Page

EMBEDDED_REL = "persons"


class PersonModelAssembler:
    """Turns person records into HAL-style resources rooted at ``resource_root``."""

    def __init__(self, resource_root: str):
        self.resource_root = resource_root

    def collection_href(self, base_url: str) -> str:
        return link_to(base_url, self.resource_root)

    def person_href(self, base_url: str, person_id: int) -> str:
        return link_to(base_url, self.resource_root, ResourcePaths.ID, id=person_id)

    def to_model(self, record: PersonRecord, base_url: str) -> dict[str, Any]:
        body = PersonOut.model_validate(record).model_dump(mode="json")
        body["_links"] = {
            "self": link(self.person_href(base_url, record.id)),
            "persons": link(self.collection_href(base_url)),
        }
        return body

    def to_collection_model(
        self,
        records: Iterable[PersonRecord],
        base_url: str,
        self_href: str,
    ) -> dict[str, Any]:
        models = [self.to_model(r, base_url) for r in records]
        body: dict[str, Any] = {}
        if models:
            body["_embedded"] = {EMBEDDED_REL: models}
        body["_links"] = {"self": link(self_href)}
        return body

    def to_paged_model(self, page: Page[PersonRecord], base_url: str) -> dict[str, Any]:
        body: dict[str, Any] = {}
        if page.content:
            body["_embedded"] = {EMBEDDED_REL: [self.to_model(r, base_url) for r in page.content]}
        body["_links"] = page_links(page, base_url, self.resource_root)
        body["page"] = {
            "size": page.size,
            "totalElements": page.total_elements,
            "totalPages": page.total_pages,
            "number": page.number,
        }
        return body
