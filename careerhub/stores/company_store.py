"""The signed-in recruiter's company, kept in step with the auth context."""

import logging

from careerhub.auth.context import AuthContext
from careerhub.backend.base import TableBackend
from careerhub.core.schemas import ApiResponse, AuthUser, Company, CompanyDraft, CompanyPatch
from careerhub.services import company_service

logger = logging.getLogger(__name__)

NOT_AUTHENTICATED = "User not authenticated"


class CompanyStore:
    """Loads the recruiter's company whenever the session user changes.

    ``create`` and ``update`` return an error string, or None on success.
    """

    def __init__(self, backend: TableBackend, auth: AuthContext) -> None:
        self._backend = backend
        self._auth = auth
        self.company: Company | None = None
        self.is_loading = True
        self.error: str | None = None
        self._mounted = True
        self._unsubscribe = auth.subscribe(self._on_user_change)

    def close(self) -> None:
        self._mounted = False
        self._unsubscribe()

    def _on_user_change(self, user: AuthUser | None) -> None:
        if user is None:
            self.company = None
        self.load()

    def load(self) -> None:
        user = self._auth.user
        if user is None:
            self.is_loading = False
            return
        self.is_loading = True
        self.error = None
        result = company_service.get_company_by_user_id(self._backend, user.id)
        if not self._mounted:
            return
        if result.not_found:
            # recruiter has not created a company yet
            self.company = None
        elif result.error:
            self.error = result.error
        else:
            self.company = result.data
        self.is_loading = False

    def _apply(self, result: ApiResponse[Company]) -> str | None:
        if result.error:
            self.error = result.error
            return result.error
        self.company = result.data
        return None

    def create(self, draft: CompanyDraft) -> str | None:
        user = self._auth.user
        if user is None:
            self.error = NOT_AUTHENTICATED
            return NOT_AUTHENTICATED
        draft = draft.model_copy(update={"recruiter_id": user.id})
        return self._apply(company_service.create_company(self._backend, draft))

    def update(self, company_id: str, patch: CompanyPatch) -> str | None:
        return self._apply(company_service.update_company(self._backend, company_id, patch))
