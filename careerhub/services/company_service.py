"""Company data access: reads, creation and partial updates."""

import logging

from careerhub.backend.base import Eq, TableBackend
from careerhub.backend.repository import Repository, by_id
from careerhub.core.errors import CareerHubError, NotFoundError
from careerhub.core.schemas import ApiResponse, Company, CompanyDraft, CompanyPatch

logger = logging.getLogger(__name__)


def _companies(backend: TableBackend) -> Repository:
    return Repository(backend, "companies", soft_delete=False)


def _fetch_one(backend: TableBackend, predicate: Eq) -> ApiResponse[Company]:
    try:
        row = _companies(backend).get_one(predicate)
    except CareerHubError as e:
        logger.error("Error fetching company: %s", e)
        return ApiResponse(error=str(e), not_found=isinstance(e, NotFoundError))
    return ApiResponse[Company](data=Company.model_validate(row))


def get_company_by_user_id(backend: TableBackend, user_id: str) -> ApiResponse[Company]:
    """Return the company owned by a recruiter."""
    return _fetch_one(backend, Eq("recruiter_id", user_id))


def get_company_by_id(backend: TableBackend, company_id: str) -> ApiResponse[Company]:
    return _fetch_one(backend, by_id(company_id))


def get_company_by_slug(backend: TableBackend, slug: str) -> ApiResponse[Company]:
    """Return the company addressed by a public careers-page slug."""
    return _fetch_one(backend, Eq("slug", slug))


def get_published_companies(backend: TableBackend) -> ApiResponse[list[Company]]:
    """Return published companies, newest first."""
    try:
        rows = _companies(backend).find(
            Eq("is_published", True), order_by="created_at", ascending=False,
        )
    except CareerHubError as e:
        logger.error("Error fetching published companies: %s", e)
        return ApiResponse(error=str(e))
    return ApiResponse[list[Company]](data=[Company.model_validate(r) for r in rows])


def create_company(backend: TableBackend, draft: CompanyDraft) -> ApiResponse[Company]:
    try:
        row = _companies(backend).insert_one(draft.to_row())
    except CareerHubError as e:
        logger.error("Error creating company: %s", e)
        return ApiResponse(error=str(e))
    logger.info("Created company %s (%s)", row["id"], row["slug"])
    return ApiResponse[Company](data=Company.model_validate(row))


def update_company(
    backend: TableBackend, company_id: str, patch: CompanyPatch,
) -> ApiResponse[Company]:
    """Apply the fields set on ``patch``; ``updated_at`` is always refreshed."""
    try:
        row = _companies(backend).update_one(patch.to_row(), by_id(company_id))
    except CareerHubError as e:
        logger.error("Error updating company: %s", e)
        return ApiResponse(error=str(e), not_found=isinstance(e, NotFoundError))
    return ApiResponse[Company](data=Company.model_validate(row))
