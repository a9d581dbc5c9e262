"""Short-lived read URLs for stored progress photos."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from uuid import UUID

from fitness_tracker.clock import utc_now
from fitness_tracker.domain.errors import (
    NotFoundOrForbidden,
    PersistenceError,
    ValidationError,
)
from fitness_tracker.domain.models import CallerIdentity
from fitness_tracker.domain.photos import AccessUrl, PhotoRecord
from fitness_tracker.services.storage import ObjectStorage, PhotoRepository

_logger = logging.getLogger(__name__)

ACCESS_URL_TTL_SECONDS = 86400


def parse_photo_id(raw: str | UUID | None) -> UUID:
    """Parse a client-supplied photo id.

    A malformed id is reported like an unknown one so callers can't probe the
    id space.
    """
    if isinstance(raw, UUID):
        return raw
    if raw is None or not str(raw).strip():
        raise ValidationError("Missing required field: photo_id")
    try:
        return UUID(str(raw).strip())
    except ValueError as exc:
        raise NotFoundOrForbidden() from exc


@dataclass
class AccessUrlService:
    """Mints read URLs for photos owned by the caller."""

    repository: PhotoRepository
    storage: ObjectStorage
    ttl_seconds: int = ACCESS_URL_TTL_SECONDS
    clock: Callable[[], datetime] = utc_now

    def issue(self, caller: CallerIdentity, photo_id: str | UUID | None) -> AccessUrl:
        """Return a fresh read URL for one of the caller's photos."""
        parsed_id = parse_photo_id(photo_id)
        record = self.repository.get_photo(parsed_id, caller.user_id)
        if record is None:
            raise NotFoundOrForbidden()
        return self.issue_for_record(record)

    def issue_for_record(self, record: PhotoRecord) -> AccessUrl:
        """Mint a read URL for an already authorized record."""
        expires_at = self.clock() + timedelta(seconds=self.ttl_seconds)
        signed_url = self.storage.presign_download(
            record.object_key, expires_in=self.ttl_seconds
        )
        try:
            self.repository.update_access_url(
                record.id,
                record.owner_id,
                signed_url=signed_url,
                expires_at=expires_at,
            )
        except PersistenceError:
            _logger.warning(
                "Failed to cache access URL for photo %s", record.id, exc_info=True
            )
        _logger.info("Issued access URL: photo_id=%s", record.id)
        return AccessUrl(signed_url=signed_url, expires_at=expires_at)
