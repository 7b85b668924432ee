"""Company asset uploads to the object-storage collaborator."""

import logging
from pathlib import PurePosixPath

from careerhub.backend.base import ObjectStore
from careerhub.core.config import StorageConfig
from careerhub.core.errors import CareerHubError, ObjectStorageError
from careerhub.core.ids import IdGenerator, uuid4_ids
from careerhub.core.schemas import ApiResponse, AssetKind

logger = logging.getLogger(__name__)

ASSET_KINDS: tuple[str, ...] = ("logo", "banner", "video")


def asset_path(company_id: str, kind: str, filename: str, ids: IdGenerator = uuid4_ids) -> str:
    """Build ``{company_id}/{kind}/{uuid}.{ext}``, keeping the original extension."""
    if kind not in ASSET_KINDS:
        msg = f"Unknown asset kind '{kind}'"
        raise ObjectStorageError(msg)
    ext = PurePosixPath(filename).suffix.lstrip(".")
    name = f"{ids()}.{ext}" if ext else ids()
    return f"{company_id}/{kind}/{name}"


def path_from_public_url(store: ObjectStore, url: str) -> str:
    """Recover the object path from a public URL; raises on foreign URLs."""
    marker = f"{store.bucket}/"
    _, found, path = url.partition(marker)
    if not found or not path:
        msg = "Invalid file URL"
        raise ObjectStorageError(msg)
    return path


def upload_company_asset(
    store: ObjectStore,
    company_id: str,
    kind: AssetKind,
    filename: str,
    data: bytes,
    *,
    config: StorageConfig | None = None,
    ids: IdGenerator = uuid4_ids,
) -> ApiResponse[str]:
    """Upload an asset and return its public URL.

    ``config`` supplies the cache-control header and the per-kind size limit;
    oversized files are rejected before the store is called.
    """
    config = config or StorageConfig()
    max_mb = config.max_upload_mb(kind)
    if len(data) > max_mb * 1024 * 1024:
        logger.warning("Rejected %s upload of %d bytes for company %s", kind, len(data), company_id)
        return ApiResponse(error=f"File is too large. Maximum size is {max_mb}MB.")
    try:
        path = asset_path(company_id, kind, filename, ids)
        store.upload(path, data, cache_control=config.cache_control, upsert=True)
        url = store.get_public_url(path)
    except CareerHubError as e:
        logger.error("Error uploading %s: %s", kind, e)
        return ApiResponse(error=str(e))
    logger.info("Uploaded %s for company %s to %s", kind, company_id, path)
    return ApiResponse[str](data=url)


def delete_company_asset(store: ObjectStore, url: str) -> ApiResponse[None]:
    try:
        store.remove([path_from_public_url(store, url)])
    except CareerHubError as e:
        logger.error("Error deleting file: %s", e)
        return ApiResponse(error=str(e))
    return ApiResponse[None]()
