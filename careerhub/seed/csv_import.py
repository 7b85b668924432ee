"""Sample-job CSV import.

Columns: title, department, location, employment_type, job_type,
experience_level, salary_range. Salary ranges look like
``"INR 12L – 18L / year"`` and are parsed into structured fields.
"""

import csv
import logging
from pathlib import Path

from pydantic import BaseModel

from careerhub.core.salary import parse_salary_range
from careerhub.core.schemas import ExperienceLevel, JobDraft, JobType

logger = logging.getLogger(__name__)

DEFAULT_CSV_PATH = Path("sample-data/sample_data.csv")


class SampleRow(BaseModel):
    """One CSV row; missing cells read as empty strings."""

    title: str
    department: str = ""
    location: str = ""
    employment_type: str = ""
    job_type: str = ""
    experience_level: str = ""
    salary_range: str = ""


def read_sample_rows(path: str | Path) -> list[SampleRow]:
    """Parse the CSV, skipping blank lines. Quoted fields may contain commas."""
    path = Path(path)
    if not path.exists():
        msg = f"CSV file not found: {path}"
        raise FileNotFoundError(msg)
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        rows = [
            SampleRow.model_validate({k: v or "" for k, v in record.items() if k})
            for record in reader
        ]
    logger.debug("Read %d sample rows from %s", len(rows), path)
    return rows


def map_experience_level(level: str | None) -> ExperienceLevel:
    value = (level or "").lower()
    if value.startswith("junior"):
        return "entry"
    if value.startswith("mid"):
        return "mid"
    if value.startswith("senior"):
        return "senior"
    return "mid"


def map_job_type(employment_type: str | None, job_type: str | None) -> JobType:
    """An ``intern`` job type wins; otherwise the employment type decides."""
    employment = (employment_type or "").lower()
    if "intern" in (job_type or "").lower():
        return "internship"
    if "full" in employment:
        return "full-time"
    if "part" in employment:
        return "part-time"
    return "contract"


def sample_description(row: SampleRow) -> str:
    return (
        f"Sample seeded job for {row.title} in the {row.department} team. "
        "This is placeholder text describing responsibilities, qualifications, "
        "and what success looks like in this role."
    )


def build_sample_jobs(
    rows: list[SampleRow], company_id: str, limit: int | None = None,
) -> list[JobDraft]:
    """Turn CSV rows into open, unfeatured job drafts."""
    if limit is not None:
        rows = rows[:limit]
    drafts = []
    for row in rows:
        salary = parse_salary_range(row.salary_range)
        drafts.append(
            JobDraft(
                company_id=company_id,
                title=row.title,
                description=sample_description(row),
                location=row.location or None,
                job_type=map_job_type(row.employment_type, row.job_type),
                experience_level=map_experience_level(row.experience_level),
                status="open",
                salary_min=salary.min if salary else None,
                salary_max=salary.max if salary else None,
                salary_currency=salary.currency if salary else None,
                salary_period=salary.period if salary else None,
                salary_range_string=salary.range_string if salary else None,
                is_featured=False,
            )
        )
    return drafts
