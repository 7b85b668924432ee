"""Configuration models and YAML loader for CareerHub."""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

_PROVIDERS = ("sqlite", "supabase")


class BackendConfig(BaseModel):
    """Which storage collaborator to talk to, and how to reach it."""

    provider: str = "sqlite"
    sqlite_path: str = "data/careerhub.db"
    supabase_url: str | None = None
    supabase_key: str | None = None

    @field_validator("provider")
    @classmethod
    def provider_known(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in _PROVIDERS:
            valid = ", ".join(_PROVIDERS)
            msg = f"Unknown backend provider '{v}'. Available: {valid}"
            raise ValueError(msg)
        return v

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "BackendConfig":
        """Build a Supabase config from the environment.

        The service-role key is preferred over the anon key so seed scripts can
        write past row-level security.
        """
        env = os.environ if environ is None else environ
        url = env.get("SUPABASE_URL") or env.get("VITE_SUPABASE_URL")
        key = (
            env.get("SUPABASE_SERVICE_ROLE_KEY")
            or env.get("SUPABASE_ANON_KEY")
            or env.get("VITE_SUPABASE_ANON_KEY")
        )
        if not url or not key:
            msg = (
                "Missing SUPABASE_URL / VITE_SUPABASE_URL or "
                "SUPABASE_SERVICE_ROLE_KEY / SUPABASE_ANON_KEY / VITE_SUPABASE_ANON_KEY"
            )
            raise ValueError(msg)
        return cls(provider="supabase", supabase_url=url, supabase_key=key)


class StorageConfig(BaseModel):
    """Object storage for company assets."""

    bucket: str = "company-assets"
    cache_control: str = "3600"
    max_image_mb: int = Field(default=5, ge=1)
    max_video_mb: int = Field(default=50, ge=1)
    local_root: str = "data/assets"
    public_base_url: str = "file://data/assets"

    @field_validator("bucket")
    @classmethod
    def bucket_not_empty(cls, v: str) -> str:
        if not v.strip():
            msg = "bucket must not be empty"
            raise ValueError(msg)
        return v.strip()

    def max_upload_mb(self, kind: str) -> int:
        return self.max_video_mb if kind == "video" else self.max_image_mb


class AuthConfig(BaseModel):
    """Auth flow settings."""

    password_reset_redirect: str = "http://localhost:5173/reset-password"
    min_password_length: int = Field(default=8, ge=1)


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    backend: BackendConfig = Field(default_factory=BackendConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
