"""Domain models for progress photos."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Literal
from uuid import UUID

PhotoType = Literal["front", "side", "back", "custom"]

PHOTO_TYPES: frozenset[str] = frozenset({"front", "side", "back", "custom"})


@dataclass(frozen=True)
class PhotoRecord:
    """Represents a persisted progress photo row."""

    id: UUID
    owner_id: UUID
    object_key: str
    photo_type: PhotoType
    photo_date: date
    notes: str | None = None
    cached_access_url: str | None = None
    access_url_expires_at: datetime | None = None
    metadata: dict[str, object] = field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def has_fresh_access_url(self, now: datetime) -> bool:
        """Return True while the cached read URL may still be used."""
        if self.cached_access_url is None or self.access_url_expires_at is None:
            return False
        return now < self.access_url_expires_at


@dataclass(frozen=True)
class NewPhoto:
    """Fields required to insert a pending photo row."""

    owner_id: UUID
    object_key: str
    photo_type: PhotoType
    photo_date: date
    notes: str | None
    metadata: dict[str, object]


@dataclass(frozen=True)
class UploadIntent:
    """Write credential handed to a client for a direct upload."""

    photo_id: UUID
    upload_url: str
    expires_at: datetime


@dataclass(frozen=True)
class AccessUrl:
    """Short-lived read URL for a stored photo."""

    signed_url: str
    expires_at: datetime
