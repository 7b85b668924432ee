"""Company profile form: slug generation, culture video and payloads."""

import re
from typing import Literal

from pydantic import BaseModel

from careerhub.core.errors import FormValidationError
from careerhub.core.schemas import (
    Company,
    CompanyDraft,
    CompanyPatch,
    UploadedVideo,
    YoutubeVideo,
)

SAVE_FAILED = "Failed to save company profile. Please try again."

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")
_SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def slugify(name: str) -> str:
    """``"Acme Corp!"`` → ``"acme-corp"``."""
    return _NON_SLUG_CHARS.sub("-", name.lower()).strip("-")


class CompanyFormData(BaseModel):
    """Raw field values of the company profile form."""

    name: str = ""
    slug: str = ""
    mission_statement: str = ""
    logo_storage_path: str = ""
    banner_storage_path: str = ""
    primary_color: str = "#0066CC"
    secondary_color: str = "#FF6B6B"
    accent_color: str = "#FFD93D"
    font_family: str = "inter"
    culture_video_youtube_url: str = ""
    culture_video_upload_path: str = ""
    culture_video_type: Literal["youtube", "upload"] | None = None
    is_published: bool = False

    @classmethod
    def from_company(cls, company: Company | None) -> "CompanyFormData":
        if company is None:
            return cls()
        return cls(
            name=company.name,
            slug=company.slug,
            mission_statement=company.mission_statement or "",
            logo_storage_path=company.logo_storage_path or "",
            banner_storage_path=company.banner_storage_path or "",
            primary_color=company.primary_color,
            secondary_color=company.secondary_color,
            accent_color=company.accent_color,
            font_family=company.font_family,
            culture_video_youtube_url=company.culture_video_youtube_url or "",
            culture_video_upload_path=company.culture_video_upload_path or "",
            culture_video_type=company.culture_video_type,
            is_published=company.is_published,
        )

    def with_name(self, name: str) -> "CompanyFormData":
        """Set the name; the slug is derived from it only while still empty."""
        return self.model_copy(update={"name": name, "slug": self.slug or slugify(name)})

    def with_youtube_url(self, url: str) -> "CompanyFormData":
        """Set the YouTube URL, keeping ``culture_video_type`` consistent."""
        if url:
            video_type = "youtube"
        elif self.culture_video_type == "youtube":
            video_type = None
        else:
            video_type = self.culture_video_type
        return self.model_copy(
            update={"culture_video_youtube_url": url, "culture_video_type": video_type},
        )

    def with_uploaded_video(self, path: str) -> "CompanyFormData":
        video_type = "upload" if path else (
            None if self.culture_video_type == "upload" else self.culture_video_type
        )
        return self.model_copy(
            update={"culture_video_upload_path": path, "culture_video_type": video_type},
        )

    def culture_video(self) -> YoutubeVideo | UploadedVideo | None:
        if self.culture_video_type == "youtube" and self.culture_video_youtube_url:
            return YoutubeVideo(url=self.culture_video_youtube_url)
        if self.culture_video_type == "upload" and self.culture_video_upload_path:
            return UploadedVideo(path=self.culture_video_upload_path)
        return None


def _validate(form: CompanyFormData) -> None:
    if not form.name.strip():
        msg = "Company name is required."
        raise FormValidationError(msg)
    if not _SLUG_RE.match(form.slug):
        msg = "URL slug may only contain lowercase letters, numbers and dashes."
        raise FormValidationError(msg)


def build_company_draft(form: CompanyFormData, recruiter_id: str = "") -> CompanyDraft:
    _validate(form)
    return CompanyDraft(
        name=form.name.strip(),
        slug=form.slug,
        recruiter_id=recruiter_id,
        logo_storage_path=form.logo_storage_path or None,
        banner_storage_path=form.banner_storage_path or None,
        primary_color=form.primary_color,
        secondary_color=form.secondary_color,
        accent_color=form.accent_color,
        font_family=form.font_family,
        mission_statement=form.mission_statement or None,
        culture_video=form.culture_video(),
        is_published=form.is_published,
    )


def build_company_patch(form: CompanyFormData) -> CompanyPatch:
    """Update payload that writes every form field."""
    _validate(form)
    return CompanyPatch(
        name=form.name.strip(),
        slug=form.slug,
        logo_storage_path=form.logo_storage_path or None,
        banner_storage_path=form.banner_storage_path or None,
        primary_color=form.primary_color,
        secondary_color=form.secondary_color,
        accent_color=form.accent_color,
        font_family=form.font_family,
        mission_statement=form.mission_statement or None,
        culture_video=form.culture_video(),
        is_published=form.is_published,
    )
