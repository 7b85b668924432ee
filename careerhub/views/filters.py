"""Filter chain for job and company listings.

Every filter is a callable ``list -> list`` that passes its input through
untouched when it has nothing to filter on, so a chain with no active
predicates is the identity. Filters run in this order:
  1. SearchTermFilter      - case-folded substring over one or more text fields
  2. LocationFilter        - exact location
  3. JobTypeFilter         - exact job type
  4. ExperienceLevelFilter - exact experience level
  5. StatusFilter          - exact status (recruiter list only)
"""

import logging
import re
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from pydantic import BaseModel

from careerhub.core.schemas import Company, CompanyWithJobCount, Job, JobWithCompany

logger = logging.getLogger(__name__)

T = TypeVar("T")

# A filter is a callable that takes items and returns a subset.
Filter = Callable[[list[T]], list[T]]

# Extracts the searchable text fields of one item.
TextOf = Callable[[Any], tuple[str, ...]]

ALL_STATUSES = "all"


def _job(item: Job | JobWithCompany) -> Job:
    return item.job if isinstance(item, JobWithCompany) else item


def _company(item: Company | CompanyWithJobCount) -> Company:
    return item.company if isinstance(item, CompanyWithJobCount) else item


def job_title(item: Job | JobWithCompany) -> tuple[str, ...]:
    """Careers page search: title only."""
    return (_job(item).title,)


def job_title_and_description(item: Job | JobWithCompany) -> tuple[str, ...]:
    """Recruiter job list search."""
    job = _job(item)
    return (job.title, job.description or "")


def job_title_and_company(item: JobWithCompany) -> tuple[str, ...]:
    """Public jobs board search: title or company name."""
    return (item.job.title, item.company.name)


def company_name_and_mission(item: Company | CompanyWithJobCount) -> tuple[str, ...]:
    company = _company(item)
    return (company.name, company.mission_statement or "")


class JobFilters(BaseModel):
    """Filter settings for a job listing. Empty values are inactive."""

    search_term: str = ""
    location: str | None = None
    job_type: str | None = None
    experience_level: str | None = None
    status: str | None = None

    @property
    def is_active(self) -> bool:
        return bool(
            self.search_term.strip()
            or self.location
            or self.job_type
            or self.experience_level
            or (self.status and self.status != ALL_STATUSES)
        )


class SearchTermFilter:
    """Keep items where any text field contains the term (case-folded)."""

    def __init__(self, term: str | None, text_of: TextOf) -> None:
        self._term = (term or "").strip().casefold()
        self._text_of = text_of

    def __call__(self, items: list[T]) -> list[T]:
        if not self._term:
            return items
        result = [i for i in items if self._matches(i)]
        removed = len(items) - len(result)
        if removed:
            logger.debug("SearchTermFilter: removed %d items", removed)
        return result

    def _matches(self, item: Any) -> bool:
        return any(self._term in text.casefold() for text in self._text_of(item))


class _ExactJobFieldFilter:
    """Keep jobs whose ``field`` equals the configured value."""

    field = ""

    def __init__(self, value: str | None) -> None:
        self._value = value or None

    def __call__(self, items: list[T]) -> list[T]:
        if self._value is None:
            return items
        result = [i for i in items if getattr(_job(i), self.field) == self._value]  # type: ignore[arg-type]
        removed = len(items) - len(result)
        if removed:
            logger.debug("%s: removed %d items", type(self).__name__, removed)
        return result


class LocationFilter(_ExactJobFieldFilter):
    field = "location"


class JobTypeFilter(_ExactJobFieldFilter):
    field = "job_type"


class ExperienceLevelFilter(_ExactJobFieldFilter):
    field = "experience_level"


class StatusFilter(_ExactJobFieldFilter):
    """``"all"`` (or nothing) disables the filter."""

    field = "status"

    def __init__(self, value: str | None) -> None:
        super().__init__(None if value == ALL_STATUSES else value)


class PublishedFilter:
    """Keep published companies only."""

    def __call__(self, items: list[T]) -> list[T]:
        result = [i for i in items if _company(i).is_published]  # type: ignore[arg-type]
        removed = len(items) - len(result)
        if removed:
            logger.debug("PublishedFilter: removed %d unpublished companies", removed)
        return result


def run_filter_chain(items: list[T], filters: list[Filter]) -> list[T]:
    """Apply filters in order, returning the surviving items."""
    result = items
    for f in filters:
        result = f(result)
    return result


def filter_jobs(
    items: list[T],
    filters: JobFilters,
    text_of: TextOf = job_title,
) -> list[T]:
    """Return the items satisfying every active filter, in input order."""
    chain: list[Filter] = [
        SearchTermFilter(filters.search_term, text_of),
        LocationFilter(filters.location),
        JobTypeFilter(filters.job_type),
        ExperienceLevelFilter(filters.experience_level),
        StatusFilter(filters.status),
    ]
    return run_filter_chain(items, chain)


def filter_companies(
    companies: list[T],
    search_term: str | None,
    published_only: bool = False,
) -> list[T]:
    """Search companies by name or mission statement."""
    chain: list[Filter] = []
    if published_only:
        chain.append(PublishedFilter())
    chain.append(SearchTermFilter(search_term, company_name_and_mission))
    return run_filter_chain(companies, chain)


def highlight(text: str, term: str | None) -> tuple[str, str, str]:
    """Split ``text`` around the first case-insensitive match of ``term``.

    Returns ``(before, match, after)``; with no match the whole text is
    ``before``.
    """
    needle = (term or "").strip()
    if not needle:
        return text, "", ""
    match = re.search(re.escape(needle), text, re.IGNORECASE)
    if match is None:
        return text, "", ""
    return text[: match.start()], match.group(), text[match.end() :]


def distinct_locations(items: Iterable[Job | JobWithCompany]) -> list[str]:
    """Locations offered as filter options, in first-seen order."""
    seen: dict[str, None] = {}
    for item in items:
        location = _job(item).location
        if location:
            seen.setdefault(location, None)
    return list(seen)


# ---------------------------------------------------------------------------
# Empty states
# ---------------------------------------------------------------------------

_EMPTY_STATES: dict[str, dict[bool, tuple[str, str | None]]] = {
    "public_jobs": {
        False: ("No open roles yet.", "Check back soon for new opportunities!"),
        True: (
            "No roles match your filters.",
            "Try clearing some filters or searching for a different keyword.",
        ),
    },
    "careers": {
        False: ("No open positions at the moment.", "Check back soon for new opportunities!"),
        True: (
            "No positions match your filters.",
            "Try adjusting your search or filters to see more roles.",
        ),
    },
    "recruiter_jobs": {
        False: ("No jobs found", "Get started by creating your first job posting"),
        True: ("No jobs found", "Try adjusting your search or filters"),
    },
    "companies": {
        False: ("No companies available yet.", None),
        True: ("No companies found matching your search.", None),
    },
}


class EmptyState(BaseModel):
    title: str
    hint: str | None = None


def empty_state(
    total: int, visible: int, filters_active: bool, view: str = "public_jobs",
) -> EmptyState | None:
    """Message for an empty listing, or None when something is visible.

    Distinguishes "nothing exists" from "filters excluded everything".
    """
    if visible:
        return None
    if view not in _EMPTY_STATES:
        valid = ", ".join(sorted(_EMPTY_STATES))
        msg = f"Unknown view '{view}'. Available: {valid}"
        raise ValueError(msg)
    filtered_out = bool(total) and filters_active
    title, hint = _EMPTY_STATES[view][filtered_out]
    return EmptyState(title=title, hint=hint)
