"""Filesystem-backed object store for local runs."""

import logging
from pathlib import Path

from careerhub.backend.base import ObjectStore
from careerhub.core.errors import ObjectStorageError

logger = logging.getLogger(__name__)


class LocalObjectStore(ObjectStore):
    """Stores objects under ``root/<bucket>/<path>``.

    Public URLs are ``<public_base_url>/<bucket>/<path>`` so they carry the
    same ``"<bucket>/"`` marker as hosted URLs.
    """

    def __init__(self, root: str | Path, public_base_url: str, bucket: str = "company-assets") -> None:
        self._root = Path(root)
        self._base_url = public_base_url.rstrip("/")
        self._bucket = bucket

    @property
    def bucket(self) -> str:
        return self._bucket

    def _resolve(self, path: str) -> Path:
        bucket_dir = (self._root / self._bucket).resolve()
        target = (bucket_dir / path).resolve()
        if bucket_dir not in target.parents:
            msg = f"Path escapes bucket: {path}"
            raise ObjectStorageError(msg)
        return target

    def upload(self, path: str, data: bytes, *, cache_control: str, upsert: bool) -> None:
        target = self._resolve(path)
        if target.exists() and not upsert:
            msg = f"Object already exists: {path}"
            raise ObjectStorageError(msg)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as e:
            msg = f"Failed to store {path}: {e.strerror or e}"
            raise ObjectStorageError(msg) from e
        logger.debug("Stored %d bytes at %s (cache-control %s)", len(data), target, cache_control)

    def get_public_url(self, path: str) -> str:
        return f"{self._base_url}/{self._bucket}/{path}"

    def remove(self, paths: list[str]) -> None:
        for path in paths:
            target = self._resolve(path)
            try:
                target.unlink(missing_ok=True)
            except OSError as e:
                msg = f"Failed to remove {path}: {e.strerror or e}"
                raise ObjectStorageError(msg) from e
