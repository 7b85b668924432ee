"""Integration test: recruiter setup through to the public pages (SQLite)."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from careerhub.auth.context import AuthContext
from careerhub.backend import get_table_backend
from careerhub.backend.base import AuthBackend
from careerhub.backend.sqlite import SqliteTables
from careerhub.content.editor import ContentEditor
from careerhub.core.config import BackendConfig, Settings
from careerhub.core.schemas import JobPatch
from careerhub.forms.company_form import CompanyFormData, build_company_draft, build_company_patch
from careerhub.forms.controller import FormController
from careerhub.forms.job_form import JobFormData, build_job_draft, friendly_job_error
from careerhub.services import job_service
from careerhub.stores.company_store import CompanyStore
from careerhub.stores.jobs_store import JobsStore
from careerhub.views.filters import JobFilters, empty_state, filter_jobs, job_title
from careerhub.views.pages import load_careers_page, load_public_jobs


@pytest.fixture()
def backend(tmp_path: Path):  # type: ignore[no-untyped-def]
    settings = Settings(backend=BackendConfig(sqlite_path=str(tmp_path / "careerhub.db")))
    tables = get_table_backend(settings)
    assert isinstance(tables, SqliteTables)
    yield tables
    tables.close()


@pytest.fixture()
def recruiter() -> AuthContext:
    auth = MagicMock(spec=AuthBackend)
    auth.get_user.return_value = {"id": "recruiter-1", "email": "r@acme.co"}
    auth.on_auth_state_change.return_value = lambda: None
    ctx = AuthContext(auth)
    ctx.initialize()
    return ctx


class TestRecruiterToCandidate:
    async def test_job_with_salary_visible_on_careers_page(
        self, backend: SqliteTables, recruiter: AuthContext,
    ) -> None:
        companies = CompanyStore(backend, recruiter)
        companies.load()
        assert companies.company is None

        form = CompanyFormData().with_name("Acme Labs")
        assert companies.create(build_company_draft(form)) is None
        company = companies.company
        assert company is not None
        assert company.slug == "acme-labs"

        jobs = JobsStore(backend, company.id)
        jobs.load()
        job = jobs.create(build_job_draft(
            JobFormData(
                title="Senior Backend Engineer",
                location="Bangalore, India",
                salary_min="2200000",
                salary_max="3200000",
                salary_currency="INR",
                salary_period="yearly",
            ),
            company.id,
        ))

        open_jobs = job_service.get_open_jobs_by_company_id(backend, company.id).data or []
        assert [j.id for j in open_jobs] == [job.id]
        assert open_jobs[0].salary_range_string == "INR 2,200,000–3,200,000 / year"

        page = (await load_careers_page(backend, "acme-labs")).data
        assert page is not None
        assert [j.id for j in page.jobs] == [job.id]

        # unpublished companies stay off the public board
        assert (await load_public_jobs(backend)).data == []
        publish = build_company_patch(
            CompanyFormData.from_company(company).model_copy(update={"is_published": True}),
        )
        assert companies.update(company.id, publish) is None
        listings = (await load_public_jobs(backend)).data or []
        assert [i.job.id for i in listings] == [job.id]

    def test_soft_deleted_job_retained(self, backend: SqliteTables, recruiter: AuthContext) -> None:
        companies = CompanyStore(backend, recruiter)
        companies.create(build_company_draft(CompanyFormData().with_name("Acme")))
        assert companies.company is not None
        jobs = JobsStore(backend, companies.company.id)

        job = jobs.create(build_job_draft(JobFormData(title="Engineer"), companies.company.id))
        jobs.remove(job.id)

        assert jobs.jobs == []
        assert job_service.get_job(backend, job.id).not_found is True
        stored = backend.select("jobs")
        assert [r["id"] for r in stored] == [job.id]
        assert stored[0]["deleted_at"] is not None

    def test_constraint_error_shown_in_form(
        self, backend: SqliteTables, recruiter: AuthContext,
    ) -> None:
        companies = CompanyStore(backend, recruiter)
        companies.create(build_company_draft(CompanyFormData().with_name("Acme")))
        assert companies.company is not None
        company_id = companies.company.id
        jobs = JobsStore(backend, company_id)
        job = jobs.create(build_job_draft(JobFormData(title="Engineer", salary_max="100"), company_id))

        form = FormController(initial="editing", describe_error=friendly_job_error)

        def save() -> None:
            jobs.update(job.id, JobPatch(salary_min=500))

        assert form.submit(save) is False
        assert form.error == (
            "Salary range is invalid. Salary max must be greater than or equal to salary min."
        )
        assert form.state == "editing"


class TestContentRoundTrip:
    async def test_editor_changes_reach_careers_page(
        self, backend: SqliteTables, recruiter: AuthContext,
    ) -> None:
        companies = CompanyStore(backend, recruiter)
        companies.create(build_company_draft(CompanyFormData().with_name("Acme")))
        assert companies.company is not None
        company_id = companies.company.id

        editor = ContentEditor(backend, company_id)
        editor.load()
        editor.update_section_field("about", "content", "We make anvils.")
        editor.update_section_field("perks", "content", "Free anvils.")
        editor.update_section_field("team", "is_visible", False)
        editor.move_section("perks", -1)
        keep = editor.add_faq("Remote?", "Yes.")
        drop = editor.add_faq("Dogs?", "Yes.")
        assert editor.save_all() is True

        editor.remove_faq(drop.id or "")
        assert editor.save_all() is True

        page = (await load_careers_page(backend, "acme")).data
        assert page is not None
        assert [s.type for s in page.sections] == ["perks", "about"]
        assert [f.id for f in page.faqs] == [keep.id]

        reopened = ContentEditor(backend, company_id)
        reopened.load()
        assert [s.type for s in reopened.sections] == ["perks", "about", "team"]
        assert [s.order_index for s in reopened.sections] == [0, 1, 2]

    def test_empty_states_for_candidate(self, backend: SqliteTables) -> None:
        jobs = job_service.get_jobs(backend).data or []
        visible = filter_jobs(jobs, JobFilters(search_term="anvil"), text_of=job_title)
        state = empty_state(len(jobs), len(visible), True, "careers")
        assert state is not None
        assert state.title == "No open positions at the moment."
