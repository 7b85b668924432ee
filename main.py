"""CLI entry point for CareerHub."""

import argparse
import asyncio
import logging
import sys

from careerhub.backend import get_table_backend
from careerhub.backend.base import TableBackend
from careerhub.core.config import Settings
from careerhub.core.salary import format_salary
from careerhub.core.schemas import EXPERIENCE_LEVELS, JOB_TYPES, Job
from careerhub.views.filters import (
    JobFilters,
    distinct_locations,
    empty_state,
    filter_companies,
    filter_jobs,
    highlight,
    job_title,
    job_title_and_company,
)
from careerhub.views.pages import (
    careers_page_title,
    load_careers_page,
    load_company_directory,
    load_public_jobs,
    public_jobs_title,
)


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default="config/settings.yaml",
        help="Path to settings YAML file (default: config/settings.yaml)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )


def _add_job_filters(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--search", default="", help="Search term")
    parser.add_argument("--location", help="Exact location")
    parser.add_argument("--type", dest="job_type", choices=JOB_TYPES, help="Job type")
    parser.add_argument(
        "--level", dest="experience_level", choices=EXPERIENCE_LEVELS, help="Experience level",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="CareerHub - branded careers pages and job postings",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- init-db ---
    init_parser = subparsers.add_parser("init-db", help="Create the local SQLite database")
    _add_common(init_parser)

    # --- jobs ---
    jobs_parser = subparsers.add_parser("jobs", help="Browse open roles across companies")
    _add_common(jobs_parser)
    _add_job_filters(jobs_parser)

    # --- companies ---
    companies_parser = subparsers.add_parser("companies", help="List published companies")
    _add_common(companies_parser)
    companies_parser.add_argument("--search", default="", help="Search name or mission")

    # --- careers ---
    careers_parser = subparsers.add_parser("careers", help="Show a company's careers page")
    _add_common(careers_parser)
    careers_parser.add_argument("slug", help="Company slug")
    _add_job_filters(careers_parser)

    return parser.parse_args(argv)


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _filters_from(args: argparse.Namespace) -> JobFilters:
    return JobFilters(
        search_term=args.search,
        location=args.location,
        job_type=args.job_type,
        experience_level=args.experience_level,
    )


def _job_line(job: Job) -> str:
    salary = format_salary(job.salary_min, job.salary_max, job.salary_currency, job.salary_period)
    location = job.location or "Location not specified"
    return f"{job.title} | {location} | {job.job_type} | {job.experience_level} | {salary}"


def _print_empty(total: int, visible: int, active: bool, view: str) -> None:
    state = empty_state(total, visible, active, view)
    if state is not None:
        print(state.title)
        if state.hint:
            print(state.hint)


def cmd_jobs(backend: TableBackend, args: argparse.Namespace) -> None:
    result = asyncio.run(load_public_jobs(backend))
    if result.error:
        print(f"Unable to load jobs: {result.error}", file=sys.stderr)
        sys.exit(1)

    listings = result.data or []
    filters = _filters_from(args)
    visible = filter_jobs(listings, filters, text_of=job_title_and_company)

    print(public_jobs_title(len(listings)))
    locations = distinct_locations(listings)
    if locations:
        print(f"Locations: {', '.join(locations)}")
    print()
    for item in visible:
        print(f"{item.company.name}: {_job_line(item.job)}")
    _print_empty(len(listings), len(visible), filters.is_active, "public_jobs")


def cmd_companies(backend: TableBackend, args: argparse.Namespace) -> None:
    result = asyncio.run(load_company_directory(backend))
    if result.error:
        print(f"Unable to load companies: {result.error}", file=sys.stderr)
        sys.exit(1)

    entries = result.data or []
    visible = filter_companies(entries, args.search)
    print(f"Discover {len(entries)} amazing companies hiring right now")
    print()
    for entry in visible:
        before, match, after = highlight(entry.company.name, args.search)
        name = f"{before}[{match}]{after}" if match else before
        print(f"{name} ({entry.company.slug}): {entry.job_count} open roles")
    _print_empty(len(entries), len(visible), bool(args.search.strip()), "companies")


def cmd_careers(backend: TableBackend, args: argparse.Namespace) -> None:
    result = asyncio.run(load_careers_page(backend, args.slug))
    if result.not_found:
        print(f"Company not found: {args.slug}", file=sys.stderr)
        sys.exit(1)
    if result.error or result.data is None:
        print(f"Unable to load careers page: {result.error}", file=sys.stderr)
        sys.exit(1)

    page = result.data
    print(careers_page_title(page.company))
    if page.company.mission_statement:
        print(page.company.mission_statement)
    for section in page.sections:
        print()
        if section.title:
            print(section.title)
        if section.content:
            print(section.content)

    filters = _filters_from(args)
    visible = filter_jobs(page.jobs, filters, text_of=job_title)
    print()
    print(f"Open Positions ({len(visible)})")
    for job in visible:
        print(f"  {_job_line(job)}")
    _print_empty(len(page.jobs), len(visible), filters.is_active, "careers")

    if page.faqs:
        print()
        print("FAQ")
        for faq in page.faqs:
            print(f"  Q: {faq.question}")
            print(f"  A: {faq.answer}")


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = Settings.from_yaml(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        backend = get_table_backend(settings)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.command == "init-db":
        if settings.backend.provider == "sqlite":
            print(f"Database ready at {settings.backend.sqlite_path}")
        else:
            print("Supabase manages its own schema; nothing to create.")
    elif args.command == "jobs":
        cmd_jobs(backend, args)
    elif args.command == "companies":
        cmd_companies(backend, args)
    elif args.command == "careers":
        cmd_careers(backend, args)


if __name__ == "__main__":
    main()
