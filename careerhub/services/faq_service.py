"""FAQ data access."""

import logging

from careerhub.backend.base import Eq, TableBackend
from careerhub.backend.repository import Repository
from careerhub.core.errors import CareerHubError
from careerhub.core.ids import IdGenerator, uuid4_ids
from careerhub.core.schemas import FAQ, ApiResponse

logger = logging.getLogger(__name__)


def _faqs(backend: TableBackend) -> Repository:
    return Repository(backend, "faqs")


def get_faqs_by_company_id(backend: TableBackend, company_id: str) -> ApiResponse[list[FAQ]]:
    try:
        rows = _faqs(backend).find(Eq("company_id", company_id), order_by="order_index")
    except CareerHubError as e:
        logger.error("Error fetching FAQs: %s", e)
        return ApiResponse(error=str(e))
    return ApiResponse[list[FAQ]](data=[FAQ.model_validate(r) for r in rows])


def save_faqs(
    backend: TableBackend,
    company_id: str,
    faqs: list[FAQ],
    ids: IdGenerator = uuid4_ids,
) -> ApiResponse[list[FAQ]]:
    """Upsert FAQs keyed on ``id``.

    ``deleted_at`` is always written, so a FAQ marked deleted in memory is
    soft-deleted in storage by the same request.
    """
    payload = [
        {
            "id": faq.id or ids(),
            "company_id": company_id,
            "question": faq.question,
            "answer": faq.answer,
            "order_index": faq.order_index if faq.order_index is not None else index,
            "deleted_at": faq.deleted_at.isoformat() if faq.deleted_at else None,
        }
        for index, faq in enumerate(faqs)
    ]
    try:
        saved = _faqs(backend).upsert(payload, on_conflict="id")
    except CareerHubError as e:
        logger.error("Error saving FAQs: %s", e)
        return ApiResponse(error=str(e))

    saved.sort(key=lambda r: r["order_index"])
    return ApiResponse[list[FAQ]](data=[FAQ.model_validate(r) for r in saved])
