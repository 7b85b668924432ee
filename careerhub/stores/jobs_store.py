"""Job list state for one screen: loading, error and mutations that refetch."""

import logging

from careerhub.backend.base import TableBackend
from careerhub.core.errors import BackendError
from careerhub.core.schemas import ApiResponse, Job, JobDraft, JobPatch, JobStatus
from careerhub.services import job_service

logger = logging.getLogger(__name__)


class JobsStore:
    """Holds the jobs of one company (or all jobs when ``company_id`` is None).

    Mutations raise ``BackendError`` on failure after recording ``error``;
    on success they refetch the list. After ``close()`` responses are
    discarded instead of applied.
    """

    def __init__(self, backend: TableBackend, company_id: str | None = None) -> None:
        self._backend = backend
        self.company_id = company_id
        self.jobs: list[Job] = []
        self.is_loading = True
        self.error: str | None = None
        self._mounted = True

    @property
    def mounted(self) -> bool:
        return self._mounted

    def close(self) -> None:
        self._mounted = False

    def _fetch(self) -> ApiResponse[list[Job]]:
        if self.company_id:
            return job_service.get_jobs_by_company_id(self._backend, self.company_id)
        return job_service.get_jobs(self._backend)

    def load(self) -> None:
        """Fetch the list; a no-op on state once the store is closed."""
        if not self._mounted:
            return
        self.is_loading = True
        self.error = None
        result = self._fetch()
        if not self._mounted:
            logger.debug("Discarding jobs response for closed store")
            return
        if result.error:
            self.error = result.error
        else:
            self.jobs = result.data or []
        self.is_loading = False

    refresh = load

    def _mutated(self, result: ApiResponse[Job]) -> Job:
        if result.error or result.data is None:
            self.error = result.error or "Job not returned"
            raise BackendError(self.error)
        self.load()
        return result.data

    def create(self, draft: JobDraft) -> Job:
        return self._mutated(job_service.create_job(self._backend, draft))

    def update(self, job_id: str, patch: JobPatch) -> Job:
        return self._mutated(job_service.update_job(self._backend, job_id, patch))

    def remove(self, job_id: str) -> Job:
        return self._mutated(job_service.delete_job(self._backend, job_id))

    def set_status(self, job_id: str, status: JobStatus) -> Job:
        """Any status may move to any other."""
        return self.update(job_id, JobPatch(status=status))
