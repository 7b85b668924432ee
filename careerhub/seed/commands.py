"""Seeding operations shared by the scripts in ``scripts/``.

Each operation raises on the first failure; the scripts turn that into a
message on stderr and a non-zero exit.
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from careerhub.backend.base import Eq, TableBackend
from careerhub.backend.repository import Repository, by_id
from careerhub.core.config import BackendConfig
from careerhub.core.errors import BackendError, NotFoundError
from careerhub.core.schemas import Company, Job, JobDraft
from careerhub.seed.catalog import build_demo_jobs, patch_seeded_job
from careerhub.seed.csv_import import DEFAULT_CSV_PATH, build_sample_jobs, read_sample_rows
from careerhub.services import company_service

logger = logging.getLogger(__name__)

COMPANY1_JOB_COUNT = 40
COMPANY2_JOB_COUNT = 30


def require_env(name: str, environ: Mapping[str, str] | None = None) -> str:
    env = os.environ if environ is None else environ
    value = env.get(name)
    if not value:
        msg = f"Missing required environment variable: {name}"
        raise ValueError(msg)
    return value


def service_role_config(environ: Mapping[str, str] | None = None) -> BackendConfig:
    """Supabase config that insists on the service-role key."""
    return BackendConfig(
        provider="supabase",
        supabase_url=require_env("SUPABASE_URL", environ),
        supabase_key=require_env("SUPABASE_SERVICE_ROLE_KEY", environ),
    )


def open_backend(config: BackendConfig) -> TableBackend:
    if config.provider == "sqlite":
        from careerhub.backend.sqlite import SqliteTables

        return SqliteTables.open(config.sqlite_path)

    from careerhub.backend.supabase import SupabaseTables, create_supabase_client

    return SupabaseTables(create_supabase_client(config))


def resolve_company(backend: TableBackend, slug: str) -> Company:
    result = company_service.get_company_by_slug(backend, slug)
    if result.not_found or (result.error is None and result.data is None):
        msg = f'Unable to find company with slug "{slug}"'
        raise NotFoundError(msg)
    if result.error:
        raise BackendError(result.error)
    return result.data  # type: ignore[return-value]


def seed_jobs(backend: TableBackend, drafts: list[JobDraft]) -> list[Job]:
    """Insert all drafts in a single request."""
    if not drafts:
        return []
    rows = Repository(backend, "jobs").insert([d.to_row() for d in drafts])
    return [Job.model_validate(r) for r in rows]


def seed_sample_jobs(
    backend: TableBackend,
    *,
    company_id: str | None = None,
    company_slug: str | None = None,
    csv_path: str | Path = DEFAULT_CSV_PATH,
    limit: int | None = None,
) -> list[Job]:
    """Seed jobs from the sample CSV for a company given by id or slug."""
    if not company_id and company_slug:
        company_id = resolve_company(backend, company_slug).id
    if not company_id:
        msg = "You must provide either --companyId=<uuid> or --companySlug=<slug>."
        raise ValueError(msg)

    drafts = build_sample_jobs(read_sample_rows(csv_path), company_id, limit)
    jobs = seed_jobs(backend, drafts)
    logger.info("Seeded %d sample jobs for company %s", len(jobs), company_id)
    return jobs


def seed_demo_jobs(backend: TableBackend, company1_slug: str, company2_slug: str) -> dict[str, int]:
    """Seed the demo catalogue into two companies. Returns jobs per slug."""
    company1 = resolve_company(backend, company1_slug)
    company2 = resolve_company(backend, company2_slug)
    jobs1 = build_demo_jobs(company1, COMPANY1_JOB_COUNT)
    jobs2 = build_demo_jobs(company2, COMPANY2_JOB_COUNT)
    seed_jobs(backend, [*jobs1, *jobs2])
    return {company1.slug: len(jobs1), company2.slug: len(jobs2)}


def patch_company_jobs(backend: TableBackend, company: Company) -> int:
    """Normalise titles and salaries of a company's seeded jobs."""
    repo = Repository(backend, "jobs")
    jobs = repo.find(Eq("company_id", company.id))
    if not jobs:
        logger.info("No jobs found for %s, nothing to patch.", company.slug)
        return 0
    for job in jobs:
        repo.update_one(patch_seeded_job(job["title"]).to_row(), by_id(job["id"]))
    logger.info("Patched %d jobs for %s", len(jobs), company.slug)
    return len(jobs)
