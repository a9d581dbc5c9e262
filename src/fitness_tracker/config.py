"""Application configuration."""

import logging
import os
from typing import Literal
from uuid import UUID

from pydantic_settings import BaseSettings, SettingsConfigDict

_logger = logging.getLogger(__name__)

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    backend: Literal["supabase", "memory"] = "supabase"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    r2_endpoint: str | None = None
    r2_access_key_id: str | None = None
    r2_secret_access_key: str | None = None
    r2_bucket_name: str = "progress-photos"
    r2_region: str = "auto"
    object_key_namespace: str = "progress-photos"
    upload_url_ttl_seconds: int = 3600
    access_url_ttl_seconds: int = 86400
    upload_content_type: str = "image/*"
    cors_allow_origins: str = "*"
    dev_tokens: str | None = None
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_dev_tokens(raw: str | None) -> dict[str, UUID]:
    """Parse `token:user-uuid` pairs used by the in-memory backend."""
    if raw is None:
        return {}
    tokens: dict[str, UUID] = {}
    for position, chunk in enumerate(raw.split(","), start=1):
        if not chunk.strip():
            continue
        token, sep, user_id = chunk.strip().partition(":")
        if not sep or not token.strip():
            _logger.warning(
                "Ignoring dev token entry %d: expected token:uuid", position
            )
            continue
        try:
            tokens[token.strip()] = UUID(user_id.strip())
        except ValueError:
            _logger.warning(
                "Ignoring dev token entry %d: %r is not a UUID", position, user_id
            )
    return tokens


def parse_origins(raw: str | None) -> list[str]:
    """Parse the allowed CORS origins, defaulting to any origin."""
    if raw is None:
        return ["*"]
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or ["*"]
