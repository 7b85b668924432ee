"""Storage backend registry with lazy loading.

Usage:
    from careerhub.backend import get_table_backend

    backend = get_table_backend(settings)
    rows = backend.select("jobs")
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

from careerhub.backend.base import AuthBackend, ObjectStore, TableBackend

if TYPE_CHECKING:
    from careerhub.core.config import Settings

__all__ = [
    "AuthBackend",
    "ObjectStore",
    "TableBackend",
    "available_backends",
    "get_auth_backend",
    "get_object_store",
    "get_table_backend",
]

# Lazy registry: maps provider name → (module_path, class_name)
_REGISTRY: dict[str, tuple[str, str]] = {
    "sqlite": ("careerhub.backend.sqlite", "SqliteTables"),
    "supabase": ("careerhub.backend.supabase", "SupabaseTables"),
}


def _check_provider(name: str) -> None:
    if name not in _REGISTRY:
        valid = ", ".join(sorted(_REGISTRY))
        msg = f"Unknown backend provider '{name}'. Available: {valid}"
        raise ValueError(msg)


def get_table_backend(settings: Settings) -> TableBackend:
    """Instantiate the table backend named by ``settings.backend.provider``.

    Raises:
        ValueError: If the provider name is unknown.
    """
    name = settings.backend.provider
    _check_provider(name)
    module_path, class_name = _REGISTRY[name]
    module = importlib.import_module(module_path)
    cls = getattr(module, class_name)
    if name == "sqlite":
        return cls.open(settings.backend.sqlite_path)  # type: ignore[no-any-return]
    client = module.create_supabase_client(settings.backend)
    return cls(client)  # type: ignore[no-any-return]


def get_auth_backend(settings: Settings) -> AuthBackend:
    """Return the hosted auth collaborator (supabase only)."""
    if settings.backend.provider != "supabase":
        msg = "Authentication requires the supabase backend"
        raise ValueError(msg)
    module = importlib.import_module("careerhub.backend.supabase")
    return module.SupabaseAuth(module.create_supabase_client(settings.backend))  # type: ignore[no-any-return]


def get_object_store(settings: Settings) -> ObjectStore:
    """Return the object store matching the configured backend."""
    _check_provider(settings.backend.provider)
    if settings.backend.provider == "supabase":
        module = importlib.import_module("careerhub.backend.supabase")
        client = module.create_supabase_client(settings.backend)
        return module.SupabaseObjectStore(client, settings.storage.bucket)  # type: ignore[no-any-return]
    from careerhub.backend.files import LocalObjectStore

    return LocalObjectStore(
        settings.storage.local_root,
        settings.storage.public_base_url,
        settings.storage.bucket,
    )


def available_backends() -> list[str]:
    """Return sorted list of registered provider names."""
    return sorted(_REGISTRY)
