"""Core data models for CareerHub.

Entity models match the hosted tables column-for-column. Payload models
(``*Draft`` / ``*Patch``) enumerate every writable field so nothing is dropped
or duplicated on the way to the storage collaborator.
"""

from datetime import datetime
from typing import Annotated, Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from careerhub.core.salary import SalaryPeriod, build_salary_range_string

JobType = Literal["full-time", "part-time", "contract", "internship"]
ExperienceLevel = Literal["entry", "mid", "senior"]
JobStatus = Literal["open", "draft", "closed"]
SectionType = Literal["about", "mission", "life", "perks", "team"]
AssetKind = Literal["logo", "banner", "video"]

JOB_TYPES: tuple[str, ...] = ("full-time", "part-time", "contract", "internship")
EXPERIENCE_LEVELS: tuple[str, ...] = ("entry", "mid", "senior")
JOB_STATUSES: tuple[str, ...] = ("open", "draft", "closed")
SECTION_TYPES: tuple[str, ...] = ("about", "mission", "life", "perks", "team")

SECTION_LABELS: dict[str, str] = {
    "about": "About Us",
    "mission": "Mission",
    "life": "Life at Company",
    "perks": "Perks & Benefits",
    "team": "The Team",
}

T = TypeVar("T")


def _check_salary_bounds(salary_min: float | None, salary_max: float | None) -> None:
    if salary_min is not None and salary_max is not None and salary_min > salary_max:
        msg = "salary_min must be less than or equal to salary_max"
        raise ValueError(msg)


# ---------------------------------------------------------------------------
# Culture video
# ---------------------------------------------------------------------------


class YoutubeVideo(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["youtube"] = "youtube"
    url: str


class UploadedVideo(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["upload"] = "upload"
    path: str


CultureVideo = Annotated[YoutubeVideo | UploadedVideo, Field(discriminator="type")]


def culture_video_columns(video: YoutubeVideo | UploadedVideo | None) -> dict[str, Any]:
    """Map a culture video onto the three storage columns."""
    if isinstance(video, YoutubeVideo):
        return {
            "culture_video_type": "youtube",
            "culture_video_youtube_url": video.url,
            "culture_video_upload_path": None,
        }
    if isinstance(video, UploadedVideo):
        return {
            "culture_video_type": "upload",
            "culture_video_youtube_url": None,
            "culture_video_upload_path": video.path,
        }
    return {
        "culture_video_type": None,
        "culture_video_youtube_url": None,
        "culture_video_upload_path": None,
    }


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------


class Company(BaseModel):
    """A recruiter's branded company, addressed publicly by ``slug``."""

    id: str
    name: str
    slug: str
    recruiter_id: str
    logo_storage_path: str | None = None
    banner_storage_path: str | None = None
    primary_color: str = "#0066CC"
    secondary_color: str = "#FF6B6B"
    accent_color: str = "#FFD93D"
    font_family: str = "inter"
    mission_statement: str | None = None
    culture_video_youtube_url: str | None = None
    culture_video_upload_path: str | None = None
    culture_video_type: Literal["youtube", "upload"] | None = None
    is_published: bool = False
    created_by: str | None = None
    created_at: datetime | None = None
    updated_by: str | None = None
    updated_at: datetime | None = None

    @property
    def culture_video(self) -> YoutubeVideo | UploadedVideo | None:
        if self.culture_video_type == "youtube" and self.culture_video_youtube_url:
            return YoutubeVideo(url=self.culture_video_youtube_url)
        if self.culture_video_type == "upload" and self.culture_video_upload_path:
            return UploadedVideo(path=self.culture_video_upload_path)
        return None


class Job(BaseModel):
    """A job posting owned by exactly one company."""

    id: str
    company_id: str
    title: str
    description: str = ""
    location: str | None = None
    job_type: JobType = "full-time"
    salary_min: float | None = None
    salary_max: float | None = None
    salary_currency: str | None = None
    salary_period: SalaryPeriod | None = None
    salary_range_string: str | None = None
    experience_level: ExperienceLevel = "mid"
    status: JobStatus = "open"
    created_by: str | None = None
    created_at: datetime | None = None
    updated_by: str | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None
    is_featured: bool = False

    @model_validator(mode="after")
    def salary_range_valid(self) -> "Job":
        _check_salary_bounds(self.salary_min, self.salary_max)
        return self


class ContentSection(BaseModel):
    """One optional block of careers-page copy."""

    id: str | None = None
    company_id: str
    type: SectionType
    order_index: int = 0
    is_visible: bool = True
    title: str | None = ""
    content: str | None = ""
    image_urls: list[str] = Field(default_factory=list)
    created_by: str | None = None
    created_at: datetime | None = None
    updated_by: str | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None


class FAQ(BaseModel):
    """A question/answer pair shown on the careers page."""

    id: str | None = None
    company_id: str
    question: str = ""
    answer: str = ""
    order_index: int = 0
    created_by: str | None = None
    created_at: datetime | None = None
    updated_by: str | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None


class AuthUser(BaseModel):
    """Cached view of the identity held by the auth collaborator."""

    model_config = ConfigDict(frozen=True)

    id: str
    email: str = ""
    email_confirmed_at: datetime | None = None
    user_metadata: dict[str, Any] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ApiResponse(BaseModel, Generic[T]):
    """Uniform result shape returned by every data-access function."""

    data: T | None = None
    error: str | None = None
    not_found: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


# ---------------------------------------------------------------------------
# Write payloads
# ---------------------------------------------------------------------------


class CompanyDraft(BaseModel):
    """Every column a recruiter supplies when creating a company."""

    name: str
    slug: str
    recruiter_id: str = ""
    logo_storage_path: str | None = None
    banner_storage_path: str | None = None
    primary_color: str = "#0066CC"
    secondary_color: str = "#FF6B6B"
    accent_color: str = "#FFD93D"
    font_family: str = "inter"
    mission_statement: str | None = None
    culture_video: CultureVideo | None = None
    is_published: bool = False
    created_by: str | None = None
    updated_by: str | None = None

    def to_row(self) -> dict[str, Any]:
        row: dict[str, Any] = {
            "name": self.name,
            "slug": self.slug,
            "recruiter_id": self.recruiter_id,
            "logo_storage_path": self.logo_storage_path,
            "banner_storage_path": self.banner_storage_path,
            "primary_color": self.primary_color,
            "secondary_color": self.secondary_color,
            "accent_color": self.accent_color,
            "font_family": self.font_family,
            "mission_statement": self.mission_statement,
            "is_published": self.is_published,
            "created_by": self.created_by,
            "updated_by": self.updated_by,
        }
        row.update(culture_video_columns(self.culture_video))
        return row


class CompanyPatch(BaseModel):
    """Partial company update; only explicitly set fields are written."""

    name: str | None = None
    slug: str | None = None
    logo_storage_path: str | None = None
    banner_storage_path: str | None = None
    primary_color: str | None = None
    secondary_color: str | None = None
    accent_color: str | None = None
    font_family: str | None = None
    mission_statement: str | None = None
    culture_video: CultureVideo | None = None
    is_published: bool | None = None
    updated_by: str | None = None

    def to_row(self) -> dict[str, Any]:
        fields = self.model_fields_set - {"culture_video"}
        row = {name: getattr(self, name) for name in sorted(fields)}
        if "culture_video" in self.model_fields_set:
            row.update(culture_video_columns(self.culture_video))
        return row


class JobDraft(BaseModel):
    """Every column a recruiter supplies when creating a job."""

    company_id: str
    title: str
    description: str = ""
    location: str | None = None
    job_type: JobType = "full-time"
    salary_min: float | None = None
    salary_max: float | None = None
    salary_currency: str | None = None
    salary_period: SalaryPeriod | None = None
    salary_range_string: str | None = None
    experience_level: ExperienceLevel = "mid"
    status: JobStatus = "open"
    is_featured: bool = False
    created_by: str | None = None
    updated_by: str | None = None

    @model_validator(mode="after")
    def derive_salary_range_string(self) -> "JobDraft":
        _check_salary_bounds(self.salary_min, self.salary_max)
        if self.salary_range_string is None:
            self.salary_range_string = build_salary_range_string(
                self.salary_min, self.salary_max, self.salary_currency, self.salary_period,
            )
        return self

    def to_row(self) -> dict[str, Any]:
        return {
            "company_id": self.company_id,
            "title": self.title,
            "description": self.description,
            "location": self.location,
            "job_type": self.job_type,
            "salary_min": self.salary_min,
            "salary_max": self.salary_max,
            "salary_currency": self.salary_currency,
            "salary_period": self.salary_period,
            "salary_range_string": self.salary_range_string,
            "experience_level": self.experience_level,
            "status": self.status,
            "is_featured": self.is_featured,
            "created_by": self.created_by,
            "updated_by": self.updated_by,
        }


class JobPatch(BaseModel):
    """Partial job update; only explicitly set fields are written."""

    title: str | None = None
    description: str | None = None
    location: str | None = None
    job_type: JobType | None = None
    salary_min: float | None = None
    salary_max: float | None = None
    salary_currency: str | None = None
    salary_period: SalaryPeriod | None = None
    salary_range_string: str | None = None
    experience_level: ExperienceLevel | None = None
    status: JobStatus | None = None
    is_featured: bool | None = None
    updated_by: str | None = None

    @model_validator(mode="after")
    def salary_range_valid(self) -> "JobPatch":
        _check_salary_bounds(self.salary_min, self.salary_max)
        return self

    def to_row(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in sorted(self.model_fields_set)}


# ---------------------------------------------------------------------------
# Derived views
# ---------------------------------------------------------------------------


class JobWithCompany(BaseModel):
    """A public job listing paired with its (published) company."""

    model_config = ConfigDict(frozen=True)

    job: Job
    company: Company


class CompanyWithJobCount(BaseModel):
    model_config = ConfigDict(frozen=True)

    company: Company
    job_count: int = 0


class CareersPage(BaseModel):
    """Everything the public careers page for one company shows."""

    company: Company
    jobs: list[Job] = Field(default_factory=list)
    sections: list[ContentSection] = Field(default_factory=list)
    faqs: list[FAQ] = Field(default_factory=list)
