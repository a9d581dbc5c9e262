"""Upload intents for progress photos."""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from fitness_tracker.clock import utc_now
from fitness_tracker.domain.errors import ValidationError
from fitness_tracker.domain.models import CallerIdentity
from fitness_tracker.domain.photos import PHOTO_TYPES, NewPhoto, UploadIntent
from fitness_tracker.services.object_keys import ObjectKeyGenerator
from fitness_tracker.services.storage import ObjectStorage, PhotoRepository

_logger = logging.getLogger(__name__)

UPLOAD_URL_TTL_SECONDS = 3600
UPLOAD_CONTENT_TYPE = "image/*"

# YYYY-MM-DD, optionally followed by an ISO time part.
_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}(?:[T ].+)?")
_INVALID_DATE = "Invalid photo_date. Expected an ISO date like 2024-01-31"


@dataclass
class UploadIntentService:
    """Creates pending photo rows and hands out direct-upload URLs."""

    repository: PhotoRepository
    storage: ObjectStorage
    key_generator: ObjectKeyGenerator
    ttl_seconds: int = UPLOAD_URL_TTL_SECONDS
    content_type: str = UPLOAD_CONTENT_TYPE
    clock: Callable[[], datetime] = utc_now

    def create_intent(
        self,
        caller: CallerIdentity,
        photo_type: str | None,
        photo_date: str | date | None,
        notes: str | None = None,
    ) -> UploadIntent:
        """Validate the request, presign a PUT and record the pending photo.

        The URL is minted before the row is written, so a storage failure
        leaves nothing behind. A failed insert after a successful presign is
        surfaced as is; the unused URL just expires.
        """
        if not photo_type or not photo_date:
            raise ValidationError("Missing required fields: photo_type, photo_date")
        if not isinstance(photo_type, str) or photo_type not in PHOTO_TYPES:
            raise ValidationError(
                "Invalid photo_type. Must be one of: front, side, back, custom"
            )
        parsed_date = parse_photo_date(photo_date)

        object_key = self.key_generator.generate(caller.user_id)
        expires_at = self.clock() + timedelta(seconds=self.ttl_seconds)
        upload_url = self.storage.presign_upload(
            object_key,
            content_type=self.content_type,
            expires_in=self.ttl_seconds,
        )
        record = self.repository.create_photo(
            NewPhoto(
                owner_id=caller.user_id,
                object_key=object_key,
                photo_type=photo_type,
                photo_date=parsed_date,
                notes=_clean_notes(notes),
                metadata={
                    "upload_status": "pending",
                    "upload_expires_at": expires_at.isoformat(),
                },
            )
        )
        _logger.info(
            "Issued upload intent: photo_id=%s type=%s", record.id, photo_type
        )
        return UploadIntent(
            photo_id=record.id, upload_url=upload_url, expires_at=expires_at
        )


def parse_photo_date(value: str | date) -> date:
    """Parse an ISO date, accepting a full ISO datetime as well."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    cleaned = value.strip()
    if not cleaned:
        raise ValidationError("Missing required fields: photo_type, photo_date")
    if not _ISO_DATE.fullmatch(cleaned):
        raise ValidationError(_INVALID_DATE)
    try:
        if len(cleaned) == 10:
            return date.fromisoformat(cleaned)
        return datetime.fromisoformat(cleaned).date()
    except ValueError as exc:
        raise ValidationError(_INVALID_DATE) from exc


def _clean_notes(notes: str | None) -> str | None:
    if notes is None:
        return None
    cleaned = notes.strip()
    return cleaned or None
