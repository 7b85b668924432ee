"""Ordering and reconciliation for careers-page sections and FAQs.

Pure functions over in-memory models: nothing here talks to storage. The
editor runs these before handing the result to the services.
"""

import logging
from collections import Counter
from collections.abc import Callable, Sequence
from typing import TypeVar

from careerhub.core.errors import DuplicateSectionTypeError
from careerhub.core.ids import IdGenerator, uuid4_ids
from careerhub.core.schemas import FAQ, SECTION_LABELS, ContentSection

logger = logging.getLogger(__name__)

Ordered = TypeVar("Ordered", ContentSection, FAQ)


def active_sorted(items: Sequence[Ordered]) -> list[Ordered]:
    """Non-deleted items in display order (stable on ties)."""
    return sorted((i for i in items if i.deleted_at is None), key=lambda i: i.order_index)


def _reindexed(items: list[Ordered]) -> list[Ordered]:
    return [
        item if item.order_index == index else item.model_copy(update={"order_index": index})
        for index, item in enumerate(items)
    ]


def duplicate_section_types(sections: Sequence[ContentSection]) -> list[str]:
    """Types held by more than one active section, in first-seen order."""
    counts = Counter(s.type for s in sections if s.deleted_at is None)
    seen: dict[str, None] = {}
    for s in sections:
        if s.deleted_at is None and counts[s.type] > 1:
            seen.setdefault(s.type, None)
    return list(seen)


def reconcile_sections(
    sections: Sequence[ContentSection],
    persisted: Sequence[ContentSection] = (),
    ids: IdGenerator = uuid4_ids,
) -> list[ContentSection]:
    """Produce the write set for a section save.

    Deleted sections are dropped, the rest are densely re-indexed in their
    current order, and every row gets an id: its own, the persisted row of the
    same type, or a fresh one.

    Raises:
        DuplicateSectionTypeError: If two active sections share a type.
    """
    active = _reindexed(active_sorted(sections))

    duplicates = duplicate_section_types(active)
    if duplicates:
        labels = [SECTION_LABELS.get(t, t) for t in duplicates]
        raise DuplicateSectionTypeError(duplicates, labels)

    persisted_ids = {p.type: p.id for p in persisted if p.id}
    result = []
    for section in active:
        if section.id is None:
            section = section.model_copy(update={"id": persisted_ids.get(section.type) or ids()})
        result.append(section)
    return result


def reconcile_faqs(faqs: Sequence[FAQ], ids: IdGenerator = uuid4_ids) -> list[FAQ]:
    """Densely re-index active FAQs; deleted ones follow so the delete persists."""
    active = _reindexed(active_sorted(faqs))
    deleted = [f for f in faqs if f.deleted_at is not None]
    result = []
    for faq in [*active, *deleted]:
        if faq.id is None:
            faq = faq.model_copy(update={"id": ids()})
        result.append(faq)
    return result


def move_item(
    items: Sequence[Ordered],
    match: Callable[[Ordered], bool],
    direction: int,
) -> list[Ordered]:
    """Swap the matched item's position with its neighbour.

    Works on the active items in display order; deleted items are carried
    through untouched. Moving the first item up, the last item down, or an
    item that is not there returns the items unchanged.
    """
    if direction not in (-1, 1):
        msg = f"direction must be -1 or 1, got {direction}"
        raise ValueError(msg)

    active = active_sorted(items)
    index = next((i for i, item in enumerate(active) if match(item)), None)
    if index is None:
        return list(items)
    target = index + direction
    if target < 0 or target >= len(active):
        return list(items)

    active[index], active[target] = active[target], active[index]
    positions = {id(item): position for position, item in enumerate(active)}
    return [
        item.model_copy(update={"order_index": positions[id(item)]})
        if id(item) in positions
        else item
        for item in items
    ]
