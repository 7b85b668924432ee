"""Recruiter-side editor for a company's careers-page sections and FAQs."""

import logging
from datetime import datetime, timezone
from typing import Any

from careerhub.backend.base import TableBackend
from careerhub.content.reconcile import (
    active_sorted,
    move_item,
    reconcile_faqs,
    reconcile_sections,
)
from careerhub.core.errors import DuplicateSectionTypeError
from careerhub.core.ids import IdGenerator, uuid4_ids
from careerhub.core.schemas import FAQ, SECTION_TYPES, ContentSection, SectionType
from careerhub.services import content_section_service, faq_service

logger = logging.getLogger(__name__)

SAVED_MESSAGE = "Content and FAQs saved."

_SECTION_FIELDS = frozenset({"title", "content", "is_visible", "image_urls"})
_FAQ_FIELDS = frozenset({"question", "answer"})


class ContentEditor:
    """In-memory working copy of one company's sections and FAQs.

    Edits only touch memory; ``save_all`` validates and writes both
    collections, replacing the working copy with the stored rows on success
    and leaving it untouched on failure.

    Usage::

        editor = ContentEditor(backend, company_id)
        editor.load()
        editor.update_section_field("about", "content", "We build things.")
        editor.add_faq()
        if not editor.save_all():
            print(editor.error)
    """

    def __init__(
        self,
        backend: TableBackend,
        company_id: str,
        ids: IdGenerator = uuid4_ids,
    ) -> None:
        self._backend = backend
        self.company_id = company_id
        self._ids = ids
        self.sections: list[ContentSection] = []
        self.faqs: list[FAQ] = []
        self._persisted: list[ContentSection] = []
        self.is_loading = False
        self.is_saving = False
        self.error: str | None = None
        self.success: str | None = None

    # -- loading -------------------------------------------------------------

    def load(self) -> None:
        self.is_loading = True
        self.error = None
        sections_result = content_section_service.get_content_sections_by_company_id(
            self._backend, self.company_id,
        )
        faqs_result = faq_service.get_faqs_by_company_id(self._backend, self.company_id)

        if sections_result.error:
            self.error = sections_result.error
        else:
            self.sections = sections_result.data or []
            self._persisted = list(self.sections)

        if faqs_result.error:
            self.error = self.error or faqs_result.error
        else:
            self.faqs = faqs_result.data or []
        self.is_loading = False

    # -- sections ------------------------------------------------------------

    def section(self, section_type: SectionType) -> ContentSection | None:
        return next((s for s in self.sections if s.type == section_type), None)

    def section_order(self) -> list[str]:
        """All section types, active ones first in display order."""
        placed = {s.type: s.order_index for s in active_sorted(self.sections)}
        return sorted(SECTION_TYPES, key=lambda t: placed.get(t, 999))

    def update_section_field(self, section_type: SectionType, field: str, value: Any) -> None:
        """Set one field, creating the section at the end if it does not exist."""
        if field not in _SECTION_FIELDS:
            msg = f"Cannot edit section field '{field}'"
            raise ValueError(msg)
        existing = self.section(section_type)
        if existing is None:
            created = ContentSection(
                id=self._ids(),
                company_id=self.company_id,
                type=section_type,
                order_index=len(self.sections),
            )
            self.sections = [*self.sections, created.model_copy(update={field: value})]
            return
        self.sections = [
            s.model_copy(update={field: value}) if s.type == section_type else s
            for s in self.sections
        ]

    def move_section(self, section_type: SectionType, direction: int) -> None:
        self.sections = move_item(self.sections, lambda s: s.type == section_type, direction)

    # -- FAQs ----------------------------------------------------------------

    @property
    def visible_faqs(self) -> list[FAQ]:
        return active_sorted(self.faqs)

    def add_faq(self, question: str = "", answer: str = "") -> FAQ:
        faq = FAQ(
            id=self._ids(),
            company_id=self.company_id,
            question=question,
            answer=answer,
            order_index=len(self.visible_faqs),
        )
        self.faqs = [*self.faqs, faq]
        return faq

    def update_faq_field(self, faq_id: str, field: str, value: str) -> None:
        if field not in _FAQ_FIELDS:
            msg = f"Cannot edit FAQ field '{field}'"
            raise ValueError(msg)
        self.faqs = [f.model_copy(update={field: value}) if f.id == faq_id else f for f in self.faqs]

    def remove_faq(self, faq_id: str) -> None:
        """Mark deleted; the soft delete is written on the next save."""
        now = datetime.now(timezone.utc)
        self.faqs = [
            f.model_copy(update={"deleted_at": now}) if f.id == faq_id else f for f in self.faqs
        ]

    def move_faq(self, faq_id: str, direction: int) -> None:
        self.faqs = move_item(self.faqs, lambda f: f.id == faq_id, direction)

    # -- saving --------------------------------------------------------------

    def save_all(self) -> bool:
        """Validate and store sections then FAQs. Returns True on success."""
        self.is_saving = True
        self.error = None
        self.success = None
        try:
            try:
                sections = reconcile_sections(self.sections, self._persisted, self._ids)
            except DuplicateSectionTypeError as e:
                self.error = str(e)
                return False
            faqs = reconcile_faqs(self.faqs, self._ids)

            sections_result = content_section_service.save_content_sections(
                self._backend, self.company_id, sections, self._ids,
            )
            if sections_result.error:
                self.error = sections_result.error
                return False
            faqs_result = faq_service.save_faqs(self._backend, self.company_id, faqs, self._ids)
            if faqs_result.error:
                self.error = faqs_result.error
                return False

            self.sections = sections_result.data or []
            self._persisted = list(self.sections)
            self.faqs = [f for f in faqs_result.data or [] if f.deleted_at is None]
            self.success = SAVED_MESSAGE
            logger.info(
                "Saved %d sections and %d FAQs for company %s",
                len(self.sections), len(self.faqs), self.company_id,
            )
            return True
        finally:
            self.is_saving = False
