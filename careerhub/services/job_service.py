"""Job data access. Reads exclude soft-deleted rows, newest first."""

import logging

from careerhub.backend.base import Eq, TableBackend
from careerhub.backend.repository import Repository, by_id
from careerhub.core.errors import CareerHubError, NotFoundError
from careerhub.core.schemas import ApiResponse, Job, JobDraft, JobPatch

logger = logging.getLogger(__name__)


def _jobs(backend: TableBackend) -> Repository:
    return Repository(backend, "jobs")


def _list(backend: TableBackend, *filters: Eq) -> ApiResponse[list[Job]]:
    try:
        rows = _jobs(backend).find(*filters, order_by="created_at", ascending=False)
    except CareerHubError as e:
        logger.error("Error fetching jobs: %s", e)
        return ApiResponse(error=str(e))
    return ApiResponse[list[Job]](data=[Job.model_validate(r) for r in rows])


def get_jobs(backend: TableBackend) -> ApiResponse[list[Job]]:
    return _list(backend)


def get_jobs_by_company_id(backend: TableBackend, company_id: str) -> ApiResponse[list[Job]]:
    return _list(backend, Eq("company_id", company_id))


def get_open_jobs_by_company_id(backend: TableBackend, company_id: str) -> ApiResponse[list[Job]]:
    """Jobs a candidate can see on the company's careers page."""
    return _list(backend, Eq("company_id", company_id), Eq("status", "open"))


def get_open_jobs(backend: TableBackend) -> ApiResponse[list[Job]]:
    return _list(backend, Eq("status", "open"))


def get_job(backend: TableBackend, job_id: str) -> ApiResponse[Job]:
    try:
        row = _jobs(backend).get_one(by_id(job_id))
    except CareerHubError as e:
        logger.error("Error fetching job: %s", e)
        return ApiResponse(error=str(e), not_found=isinstance(e, NotFoundError))
    return ApiResponse[Job](data=Job.model_validate(row))


def create_job(backend: TableBackend, draft: JobDraft) -> ApiResponse[Job]:
    try:
        row = _jobs(backend).insert_one(draft.to_row())
    except CareerHubError as e:
        logger.error("Error creating job: %s", e)
        return ApiResponse(error=str(e))
    logger.info("Created job %s: %s", row["id"], row["title"])
    return ApiResponse[Job](data=Job.model_validate(row))


def update_job(backend: TableBackend, job_id: str, patch: JobPatch) -> ApiResponse[Job]:
    try:
        row = _jobs(backend).update_one(patch.to_row(), by_id(job_id))
    except CareerHubError as e:
        logger.error("Error updating job: %s", e)
        return ApiResponse(error=str(e), not_found=isinstance(e, NotFoundError))
    return ApiResponse[Job](data=Job.model_validate(row))


def delete_job(backend: TableBackend, job_id: str) -> ApiResponse[Job]:
    """Soft delete: stamps ``deleted_at``; the row stays in storage."""
    try:
        row = _jobs(backend).soft_delete(by_id(job_id))
    except CareerHubError as e:
        logger.error("Error deleting job: %s", e)
        return ApiResponse(error=str(e), not_found=isinstance(e, NotFoundError))
    logger.info("Soft-deleted job %s", job_id)
    return ApiResponse[Job](data=Job.model_validate(row))
