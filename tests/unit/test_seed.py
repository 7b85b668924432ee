"""Tests for CSV import, the demo catalogue and the seeding operations."""

from pathlib import Path

import pytest

from careerhub.backend.sqlite import SqliteTables, init_db
from careerhub.core.errors import NotFoundError
from careerhub.core.schemas import Company, CompanyDraft
from careerhub.seed.catalog import (
    DEMO_ROLES,
    base_title,
    build_demo_jobs,
    patch_seeded_job,
)
from careerhub.seed.commands import (
    COMPANY1_JOB_COUNT,
    COMPANY2_JOB_COUNT,
    patch_company_jobs,
    require_env,
    resolve_company,
    seed_demo_jobs,
    seed_sample_jobs,
    service_role_config,
)
from careerhub.seed.csv_import import (
    build_sample_jobs,
    map_experience_level,
    map_job_type,
    read_sample_rows,
)
from careerhub.services import company_service, job_service

SAMPLE_CSV = Path(__file__).parent.parent.parent / "sample-data" / "sample_data.csv"


@pytest.fixture()
def db():  # type: ignore[no-untyped-def]
    tables = SqliteTables(init_db(":memory:"))
    yield tables
    tables.close()


def _company(db: SqliteTables, slug: str) -> Company:
    result = company_service.create_company(
        db, CompanyDraft(name=slug.title(), slug=slug, recruiter_id=f"r-{slug}"),
    )
    assert result.data is not None
    return result.data


# ---------------------------------------------------------------------------
# CSV import
# ---------------------------------------------------------------------------


class TestReadSampleRows:
    def test_quoted_fields(self) -> None:
        rows = read_sample_rows(SAMPLE_CSV)
        assert len(rows) == 10
        titles = [r.title for r in rows]
        assert "QA Analyst, Automation" in titles
        assert 'Sales Executive "Enterprise"' in titles
        assert rows[0].location == "Bangalore, India"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="CSV file not found"):
            read_sample_rows(tmp_path / "nope.csv")

    def test_short_rows_and_blank_lines(self, tmp_path: Path) -> None:
        p = tmp_path / "jobs.csv"
        p.write_text("title,department,location\nEngineer,Eng\n\nDesigner,Design,Remote\n")
        rows = read_sample_rows(p)
        assert [r.title for r in rows] == ["Engineer", "Designer"]
        assert rows[0].location == ""
        assert rows[0].salary_range == ""


class TestMappings:
    @pytest.mark.parametrize(
        ("raw", "level"),
        [("Junior", "entry"), ("Mid-level", "mid"), ("Senior", "senior"), ("", "mid"), ("Lead", "mid")],
    )
    def test_experience_level(self, raw: str, level: str) -> None:
        assert map_experience_level(raw) == level

    @pytest.mark.parametrize(
        ("employment", "job_type", "expected"),
        [
            ("Full time", "Internship", "internship"),
            ("Full time", "Permanent", "full-time"),
            ("Part time", "Contract", "part-time"),
            ("Contract", "Contract", "contract"),
            ("", "", "contract"),
        ],
    )
    def test_job_type(self, employment: str, job_type: str, expected: str) -> None:
        assert map_job_type(employment, job_type) == expected


class TestBuildSampleJobs:
    def test_parses_salaries(self) -> None:
        drafts = build_sample_jobs(read_sample_rows(SAMPLE_CSV), "c1")
        by_title = {d.title: d for d in drafts}

        backend = by_title["Backend Engineer"]
        assert (backend.salary_min, backend.salary_max) == (1800000, 2800000)
        assert backend.salary_currency == "INR"
        assert backend.salary_period == "yearly"
        assert backend.salary_range_string == "INR 18L – 28L / year"

        intern = by_title["Product Design Intern"]
        assert intern.job_type == "internship"
        assert (intern.salary_min, intern.salary_period) == (25000, "monthly")

        support = by_title["Customer Support Associate"]
        assert support.salary_min is None
        assert support.salary_range_string is None

    def test_all_open_and_unfeatured(self) -> None:
        drafts = build_sample_jobs(read_sample_rows(SAMPLE_CSV), "c1")
        assert {d.status for d in drafts} == {"open"}
        assert not any(d.is_featured for d in drafts)
        assert all(d.company_id == "c1" for d in drafts)

    def test_limit(self) -> None:
        assert len(build_sample_jobs(read_sample_rows(SAMPLE_CSV), "c1", limit=3)) == 3


# ---------------------------------------------------------------------------
# Demo catalogue
# ---------------------------------------------------------------------------


class TestCatalog:
    def test_base_title(self) -> None:
        assert base_title("Data Analyst #3") == "Data Analyst"
        assert base_title("Data Analyst") == "Data Analyst"

    def test_build_cycles_roles(self) -> None:
        company = Company(id="c1", name="Acme", slug="acme", recruiter_id="u")
        drafts = build_demo_jobs(company, len(DEMO_ROLES) + 1)
        assert drafts[0].title == drafts[-1].title == DEMO_ROLES[0].title
        assert drafts[0].salary_range_string == "₹12L – ₹18L per year"
        assert "Join Acme as a Software Engineer." in drafts[0].description

    def test_patch_known_title(self) -> None:
        row = patch_seeded_job("Senior Backend Engineer #12").to_row()
        assert row["title"] == "Senior Backend Engineer"
        assert row["salary_min"] == 2_200_000
        assert row["salary_currency"] == "INR"

    def test_patch_unknown_title_clears_salary(self) -> None:
        row = patch_seeded_job("Chief Vibes Officer #2").to_row()
        assert row["title"] == "Chief Vibes Officer"
        assert row["salary_min"] is None
        assert row["salary_range_string"] is None


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


class TestEnvironment:
    def test_require_env(self) -> None:
        assert require_env("X", {"X": "1"}) == "1"
        with pytest.raises(ValueError, match="Missing required environment variable: X"):
            require_env("X", {})

    def test_service_role_config(self) -> None:
        config = service_role_config(
            {"SUPABASE_URL": "https://x.supabase.co", "SUPABASE_SERVICE_ROLE_KEY": "k"},
        )
        assert config.provider == "supabase"
        assert config.supabase_key == "k"

    def test_service_role_required(self) -> None:
        with pytest.raises(ValueError, match="SUPABASE_SERVICE_ROLE_KEY"):
            service_role_config({"SUPABASE_URL": "https://x.supabase.co", "SUPABASE_ANON_KEY": "a"})


class TestSeedCommands:
    def test_resolve_unknown_slug(self, db: SqliteTables) -> None:
        with pytest.raises(NotFoundError, match='Unable to find company with slug "ghost"'):
            resolve_company(db, "ghost")

    def test_seed_sample_by_slug(self, db: SqliteTables) -> None:
        company = _company(db, "acme")
        jobs = seed_sample_jobs(db, company_slug="acme", csv_path=SAMPLE_CSV, limit=4)
        assert len(jobs) == 4
        stored = job_service.get_jobs_by_company_id(db, company.id).data or []
        assert len(stored) == 4

    def test_seed_sample_by_id(self, db: SqliteTables) -> None:
        company = _company(db, "acme")
        jobs = seed_sample_jobs(db, company_id=company.id, csv_path=SAMPLE_CSV)
        assert len(jobs) == 10

    def test_seed_sample_requires_target(self, db: SqliteTables) -> None:
        with pytest.raises(ValueError, match="--companyId"):
            seed_sample_jobs(db, csv_path=SAMPLE_CSV)

    def test_seed_demo_jobs(self, db: SqliteTables) -> None:
        _company(db, "acme")
        _company(db, "globex")
        counts = seed_demo_jobs(db, "acme", "globex")
        assert counts == {"acme": COMPANY1_JOB_COUNT, "globex": COMPANY2_JOB_COUNT}
        assert len(job_service.get_open_jobs(db).data or []) == COMPANY1_JOB_COUNT + COMPANY2_JOB_COUNT

    def test_seed_demo_unknown_company_writes_nothing(self, db: SqliteTables) -> None:
        _company(db, "acme")
        with pytest.raises(NotFoundError):
            seed_demo_jobs(db, "acme", "missing")
        assert db.select("jobs") == []

    def test_patch_company_jobs(self, db: SqliteTables) -> None:
        company = _company(db, "acme")
        db.insert("jobs", [
            {"company_id": company.id, "title": "Data Analyst #3"},
            {"company_id": company.id, "title": "Astronaut #1", "salary_min": 5, "salary_max": 9},
        ])
        assert patch_company_jobs(db, company) == 2
        jobs = {j.title: j for j in job_service.get_jobs_by_company_id(db, company.id).data or []}
        assert jobs["Data Analyst"].salary_min == 900_000
        assert jobs["Data Analyst"].salary_period == "yearly"
        assert jobs["Astronaut"].salary_min is None

    def test_patch_without_jobs(self, db: SqliteTables) -> None:
        assert patch_company_jobs(db, _company(db, "acme")) == 0
