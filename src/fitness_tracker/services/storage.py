"""Storage interfaces for photo records and photo objects."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from fitness_tracker.domain.photos import NewPhoto, PhotoRecord


class PhotoRepository(Protocol):
    """Persistence interface for progress photo rows.

    Every read and write is filtered by owner; a row belonging to another user
    behaves exactly like a missing row.
    """

    def create_photo(self, photo: NewPhoto) -> PhotoRecord:
        """Insert a pending photo row and return it."""

    def get_photo(self, photo_id: UUID, owner_id: UUID) -> PhotoRecord | None:
        """Return the owner's photo, if present."""

    def list_photos(self, owner_id: UUID, limit: int) -> list[PhotoRecord]:
        """Return the owner's photos, newest photo date first."""

    def update_access_url(
        self,
        photo_id: UUID,
        owner_id: UUID,
        signed_url: str,
        expires_at: datetime,
    ) -> None:
        """Store a freshly minted read URL on the row."""

    def delete_photo(self, photo_id: UUID, owner_id: UUID) -> bool:
        """Delete the owner's photo row and report whether one existed."""


class ObjectStorage(Protocol):
    """Interface for an S3-compatible store that can presign requests."""

    def presign_upload(self, key: str, content_type: str, expires_in: int) -> str:
        """Return a presigned PUT URL for the exact key."""

    def presign_download(self, key: str, expires_in: int) -> str:
        """Return a presigned GET URL for the key."""

    def delete_object(self, key: str) -> None:
        """Delete the object stored under the key, if any."""
