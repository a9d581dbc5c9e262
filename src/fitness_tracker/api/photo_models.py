"""Pydantic models for the photo endpoints."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from fitness_tracker.domain.photos import PhotoRecord


class UploadPhotoRequest(BaseModel):
    """Body of POST /upload-progress-photo.

    Fields are optional here so missing values reach the service and come back
    as a 400 with a readable message.
    """

    model_config = ConfigDict(extra="ignore")

    photo_type: str | None = None
    photo_date: str | None = None
    notes: str | None = None


class UploadPhotoResponse(BaseModel):
    """Upload intent returned to the client."""

    photo_id: str
    upload_url: str
    expires_at: str


class PhotoUrlRequest(BaseModel):
    """Body of POST /get-photo-url."""

    model_config = ConfigDict(extra="ignore")

    photo_id: str | None = None


class PhotoUrlResponse(BaseModel):
    """Read URL returned to the client."""

    signed_url: str
    expires_at: str


class PhotoResponse(BaseModel):
    """Photo metadata as exposed to its owner."""

    id: UUID
    photo_type: str
    photo_date: date
    notes: str | None
    signed_url: str | None
    url_expires_at: datetime | None
    created_at: datetime | None

    @classmethod
    def from_record(cls, record: PhotoRecord, now: datetime) -> "PhotoResponse":
        """Build the response, hiding a cached URL that is no longer usable."""
        fresh = record.has_fresh_access_url(now)
        return cls(
            id=record.id,
            photo_type=record.photo_type,
            photo_date=record.photo_date,
            notes=record.notes,
            signed_url=record.cached_access_url if fresh else None,
            url_expires_at=record.access_url_expires_at if fresh else None,
            created_at=record.created_at,
        )
