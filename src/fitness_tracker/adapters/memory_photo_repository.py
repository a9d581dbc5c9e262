"""In-memory progress photo repository."""

import threading
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import datetime
from uuid import UUID, uuid4

from fitness_tracker.clock import utc_now
from fitness_tracker.domain.photos import NewPhoto, PhotoRecord
from fitness_tracker.services.storage import PhotoRepository


@dataclass
class InMemoryPhotoRepository(PhotoRepository):
    """Dict-backed repository with the same owner filtering as Supabase."""

    clock: Callable[[], datetime] = utc_now
    photos: dict[UUID, PhotoRecord] = field(default_factory=dict)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False
    )

    def create_photo(self, photo: NewPhoto) -> PhotoRecord:
        now = self.clock()
        record = PhotoRecord(
            id=uuid4(),
            owner_id=photo.owner_id,
            object_key=photo.object_key,
            photo_type=photo.photo_type,
            photo_date=photo.photo_date,
            notes=photo.notes,
            metadata=dict(photo.metadata),
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            self.photos[record.id] = record
        return record

    def get_photo(self, photo_id: UUID, owner_id: UUID) -> PhotoRecord | None:
        record = self.photos.get(photo_id)
        if record is None or record.owner_id != owner_id:
            return None
        return record

    def list_photos(self, owner_id: UUID, limit: int) -> list[PhotoRecord]:
        owned = [
            record for record in self.photos.values() if record.owner_id == owner_id
        ]
        owned.sort(
            key=lambda record: (record.photo_date, record.created_at), reverse=True
        )
        return owned[:limit]

    def update_access_url(
        self,
        photo_id: UUID,
        owner_id: UUID,
        signed_url: str,
        expires_at: datetime,
    ) -> None:
        with self._lock:
            record = self.get_photo(photo_id, owner_id)
            if record is None:
                return
            self.photos[photo_id] = replace(
                record,
                cached_access_url=signed_url,
                access_url_expires_at=expires_at,
                updated_at=self.clock(),
            )

    def delete_photo(self, photo_id: UUID, owner_id: UUID) -> bool:
        with self._lock:
            if self.get_photo(photo_id, owner_id) is None:
                return False
            del self.photos[photo_id]
        return True
