"""Content-section data access."""

import logging

from careerhub.backend.base import Eq, TableBackend
from careerhub.backend.repository import Repository
from careerhub.core.errors import CareerHubError
from careerhub.core.ids import IdGenerator, uuid4_ids
from careerhub.core.schemas import ApiResponse, ContentSection

logger = logging.getLogger(__name__)


def _sections(backend: TableBackend) -> Repository:
    return Repository(backend, "content_sections")


def get_content_sections_by_company_id(
    backend: TableBackend, company_id: str,
) -> ApiResponse[list[ContentSection]]:
    """Return live sections in display order."""
    try:
        rows = _sections(backend).find(Eq("company_id", company_id), order_by="order_index")
    except CareerHubError as e:
        logger.error("Error fetching content sections: %s", e)
        return ApiResponse(error=str(e))
    return ApiResponse[list[ContentSection]](
        data=[ContentSection.model_validate(r) for r in rows],
    )


def save_content_sections(
    backend: TableBackend,
    company_id: str,
    sections: list[ContentSection],
    ids: IdGenerator = uuid4_ids,
) -> ApiResponse[list[ContentSection]]:
    """Upsert sections, reusing a stored row for each type.

    A section whose id is already stored keeps that row. Otherwise the stored
    row of the same type is reused, preferring a live row over a soft-deleted
    one, so its id and ``created_at`` survive. Everything else gets a fresh
    client-side id.
    """
    repo = _sections(backend)
    try:
        existing = repo.find(Eq("company_id", company_id), include_deleted=True)
        by_id = {row["id"]: row for row in existing}
        by_type: dict[str, dict] = {}
        for row in existing:
            kept = by_type.get(row["type"])
            if kept is None or (kept.get("deleted_at") and not row.get("deleted_at")):
                by_type[row["type"]] = row

        payload = []
        for section in sections:
            current = by_id.get(section.id) if section.id else None
            if current is None:
                current = by_type.get(section.type)
            row = {
                "id": current["id"] if current else section.id or ids(),
                "company_id": company_id,
                "type": section.type,
                "order_index": section.order_index,
                "is_visible": section.is_visible,
                "title": section.title or "",
                "content": section.content or "",
                "image_urls": list(section.image_urls),
                "deleted_at": section.deleted_at.isoformat() if section.deleted_at else None,
            }
            if current is not None:
                row["created_at"] = current["created_at"]
            payload.append(row)

        saved = repo.upsert(payload)
    except CareerHubError as e:
        logger.error("Error saving content sections: %s", e)
        return ApiResponse(error=str(e))

    saved.sort(key=lambda r: r["order_index"])
    logger.info("Saved %d content sections for company %s", len(saved), company_id)
    return ApiResponse[list[ContentSection]](
        data=[ContentSection.model_validate(r) for r in saved],
    )
