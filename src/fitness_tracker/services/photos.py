"""Owner-scoped access to progress photo records."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from fitness_tracker.clock import utc_now
from fitness_tracker.domain.errors import NotFoundOrForbidden, PhotoError
from fitness_tracker.domain.models import CallerIdentity
from fitness_tracker.domain.photos import AccessUrl, PhotoRecord
from fitness_tracker.services.access_urls import AccessUrlService, parse_photo_id
from fitness_tracker.services.storage import ObjectStorage, PhotoRepository

_logger = logging.getLogger(__name__)


@dataclass
class PhotoLibraryService:
    """Lists, reads and deletes a user's progress photos."""

    repository: PhotoRepository
    storage: ObjectStorage
    access_url_service: AccessUrlService
    clock: Callable[[], datetime] = utc_now

    def list_photos(self, caller: CallerIdentity, limit: int = 50) -> list[PhotoRecord]:
        """Return the caller's photos."""
        return self.repository.list_photos(caller.user_id, max(1, min(limit, 200)))

    def get_photo(self, caller: CallerIdentity, photo_id: str | UUID) -> PhotoRecord:
        """Return one of the caller's photos."""
        record = self.repository.get_photo(parse_photo_id(photo_id), caller.user_id)
        if record is None:
            raise NotFoundOrForbidden()
        return record

    def resolve_access_url(
        self, caller: CallerIdentity, photo_id: str | UUID
    ) -> AccessUrl:
        """Return the cached read URL while fresh, otherwise mint a new one."""
        record = self.get_photo(caller, photo_id)
        if record.has_fresh_access_url(self.clock()):
            return AccessUrl(
                signed_url=record.cached_access_url,
                expires_at=record.access_url_expires_at,
            )
        return self.access_url_service.issue_for_record(record)

    def delete_photo(self, caller: CallerIdentity, photo_id: str | UUID) -> None:
        """Delete the caller's photo row, then try to remove the object."""
        record = self.get_photo(caller, photo_id)
        if not self.repository.delete_photo(record.id, caller.user_id):
            raise NotFoundOrForbidden()
        try:
            self.storage.delete_object(record.object_key)
        except PhotoError:
            _logger.warning(
                "Failed to delete stored object for photo %s", record.id, exc_info=True
            )
