"""Async loaders for the public pages.

Each loader fans its independent reads out to worker threads with
``asyncio.gather`` and joins the results into one ``ApiResponse``.
"""

import asyncio
import logging
from collections import Counter

from careerhub.backend.base import TableBackend
from careerhub.core.schemas import (
    ApiResponse,
    CareersPage,
    Company,
    CompanyWithJobCount,
    JobWithCompany,
)
from careerhub.services import (
    company_service,
    content_section_service,
    faq_service,
    job_service,
)

logger = logging.getLogger(__name__)


def public_jobs_title(count: int) -> str:
    if count:
        return f"Browse {count} open roles | CareerHub"
    return "Browse open roles | CareerHub"


def public_jobs_description(count: int) -> str:
    if count:
        return (
            f"Discover {count} open roles across top companies on CareerHub. "
            "Filter by location, job type, and level."
        )
    return (
        "Discover open roles across top companies on CareerHub. "
        "Filter by location, job type, and level."
    )


def careers_page_title(company: Company) -> str:
    return f"{company.name} – Careers at {company.name} | CareerHub"


def careers_page_description(company: Company, job_count: int) -> str:
    base = company.mission_statement or f"{company.name} careers at a glance."
    if not job_count:
        return base
    plural = "" if job_count == 1 else "s"
    return f"{base} {job_count} open position{plural} available."


async def load_public_jobs(backend: TableBackend) -> ApiResponse[list[JobWithCompany]]:
    """Open jobs of published companies, newest first."""
    jobs_result, companies_result = await asyncio.gather(
        asyncio.to_thread(job_service.get_open_jobs, backend),
        asyncio.to_thread(company_service.get_published_companies, backend),
    )
    if jobs_result.error:
        return ApiResponse(error=jobs_result.error)
    if companies_result.error:
        return ApiResponse(error=companies_result.error)

    companies = {c.id: c for c in companies_result.data or []}
    listings = [
        JobWithCompany(job=job, company=companies[job.company_id])
        for job in jobs_result.data or []
        if job.company_id in companies
    ]
    logger.info("Loaded %d public job listings", len(listings))
    return ApiResponse[list[JobWithCompany]](data=listings)


async def load_company_directory(backend: TableBackend) -> ApiResponse[list[CompanyWithJobCount]]:
    """Published companies with their open-job counts."""
    companies_result, jobs_result = await asyncio.gather(
        asyncio.to_thread(company_service.get_published_companies, backend),
        asyncio.to_thread(job_service.get_open_jobs, backend),
    )
    if companies_result.error:
        return ApiResponse(error=companies_result.error)
    if jobs_result.error:
        # counts degrade to zero
        logger.warning("Job counts unavailable: %s", jobs_result.error)

    counts = Counter(job.company_id for job in jobs_result.data or [])
    entries = [
        CompanyWithJobCount(company=c, job_count=counts.get(c.id, 0))
        for c in companies_result.data or []
    ]
    return ApiResponse[list[CompanyWithJobCount]](data=entries)


async def load_careers_page(backend: TableBackend, slug: str) -> ApiResponse[CareersPage]:
    """Company, open jobs, visible sections and FAQs for one careers page.

    An unknown slug yields ``not_found=True``. Section and FAQ failures leave
    those parts empty; a job failure fails the page.
    """
    company_result = await asyncio.to_thread(company_service.get_company_by_slug, backend, slug)
    if company_result.error or company_result.data is None:
        return ApiResponse(
            error=company_result.error or "Company not found",
            not_found=company_result.not_found or company_result.data is None,
        )
    company = company_result.data

    jobs_result, sections_result, faqs_result = await asyncio.gather(
        asyncio.to_thread(job_service.get_open_jobs_by_company_id, backend, company.id),
        asyncio.to_thread(
            content_section_service.get_content_sections_by_company_id, backend, company.id,
        ),
        asyncio.to_thread(faq_service.get_faqs_by_company_id, backend, company.id),
    )
    if jobs_result.error:
        return ApiResponse(error=jobs_result.error)
    if sections_result.error:
        logger.warning("Content sections unavailable for %s: %s", slug, sections_result.error)
    if faqs_result.error:
        logger.warning("FAQs unavailable for %s: %s", slug, faqs_result.error)

    page = CareersPage(
        company=company,
        jobs=jobs_result.data or [],
        sections=[s for s in sections_result.data or [] if s.is_visible],
        faqs=faqs_result.data or [],
    )
    return ApiResponse[CareersPage](data=page)
