"""Job form data and the payloads built from it."""

import logging

from pydantic import BaseModel

from careerhub.core.errors import FormValidationError
from careerhub.core.schemas import (
    ExperienceLevel,
    Job,
    JobDraft,
    JobPatch,
    JobStatus,
    JobType,
)
from careerhub.core.salary import SalaryPeriod, build_salary_range_string

logger = logging.getLogger(__name__)

SALARY_ORDER_ERROR = "Salary max must be greater than or equal to salary min."
SALARY_CONSTRAINT_ERROR = (
    "Salary range is invalid. Salary max must be greater than or equal to salary min."
)


class JobFormData(BaseModel):
    """Raw field values as typed into the job form."""

    title: str = ""
    description: str = ""
    location: str = ""
    job_type: JobType = "full-time"
    salary_min: str = ""
    salary_max: str = ""
    salary_currency: str = "USD"
    salary_period: SalaryPeriod = "monthly"
    experience_level: ExperienceLevel = "mid"
    status: JobStatus = "open"

    @classmethod
    def from_job(cls, job: Job | None) -> "JobFormData":
        if job is None:
            return cls()
        return cls(
            title=job.title,
            description=job.description,
            location=job.location or "",
            job_type=job.job_type,
            salary_min=_amount_text(job.salary_min),
            salary_max=_amount_text(job.salary_max),
            salary_currency=job.salary_currency or "USD",
            salary_period=job.salary_period or "monthly",
            experience_level=job.experience_level,
            status=job.status,
        )


def _amount_text(value: float | None) -> str:
    if value is None:
        return ""
    return str(int(value)) if float(value).is_integer() else str(value)


def _parse_amount(text: str, label: str) -> float | None:
    text = text.strip().replace(",", "")
    if not text:
        return None
    try:
        return float(text)
    except ValueError:
        msg = f"{label} must be a number."
        raise FormValidationError(msg) from None


def _salary_fields(form: JobFormData) -> dict[str, object]:
    salary_min = _parse_amount(form.salary_min, "Salary min")
    salary_max = _parse_amount(form.salary_max, "Salary max")
    if salary_min is not None and salary_max is not None and salary_min > salary_max:
        raise FormValidationError(SALARY_ORDER_ERROR)
    return {
        "salary_min": salary_min,
        "salary_max": salary_max,
        "salary_currency": form.salary_currency or None,
        "salary_period": form.salary_period,
        "salary_range_string": build_salary_range_string(
            salary_min, salary_max, form.salary_currency, form.salary_period,
        ),
    }


def _require_text(form: JobFormData) -> None:
    if not form.title.strip():
        msg = "Job title is required."
        raise FormValidationError(msg)


def build_job_draft(form: JobFormData, company_id: str) -> JobDraft:
    """Validate the form and build the create payload.

    Raises:
        FormValidationError: On a missing title, a non-numeric salary or
            salary max below salary min. No collaborator is called.
    """
    _require_text(form)
    return JobDraft(
        company_id=company_id,
        title=form.title.strip(),
        description=form.description,
        location=form.location.strip() or None,
        job_type=form.job_type,
        experience_level=form.experience_level,
        status=form.status,
        **_salary_fields(form),
    )


def build_job_patch(form: JobFormData) -> JobPatch:
    """Validate the form and build an update payload setting every field."""
    _require_text(form)
    return JobPatch(
        title=form.title.strip(),
        description=form.description,
        location=form.location.strip() or None,
        job_type=form.job_type,
        experience_level=form.experience_level,
        status=form.status,
        **_salary_fields(form),
    )


def friendly_job_error(message: str) -> str:
    """Reword storage errors the recruiter can act on."""
    if "salary_range_valid" in message:
        return SALARY_CONSTRAINT_ERROR
    return message
