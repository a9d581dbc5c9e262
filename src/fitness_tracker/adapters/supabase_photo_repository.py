"""Supabase-backed progress photo repository."""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

import httpx
from postgrest import APIError
from supabase import Client

from fitness_tracker.clock import utc_now
from fitness_tracker.domain.errors import PersistenceError
from fitness_tracker.domain.photos import NewPhoto, PhotoRecord
from fitness_tracker.services.storage import PhotoRepository

_TABLE = "progress_photos"
_COLUMNS = (
    "id, user_id, cloudflare_r2_key, photo_type, photo_date, notes, "
    "signed_url, url_expires_at, metadata, created_at, updated_at"
)


@contextmanager
def _translate_errors(action: str) -> Iterator[None]:
    try:
        yield
    except (APIError, httpx.HTTPError) as exc:
        raise PersistenceError(f"Failed to {action}") from exc


@dataclass
class SupabasePhotoRepository(PhotoRepository):
    """Supabase implementation for progress photo persistence."""

    client: Client
    clock: Callable[[], datetime] = utc_now

    def create_photo(self, photo: NewPhoto) -> PhotoRecord:
        """Insert a pending photo row and return it."""
        with _translate_errors("create photo record"):
            response = (
                self.client.table(_TABLE)
                .insert(
                    {
                        "user_id": str(photo.owner_id),
                        "cloudflare_r2_key": photo.object_key,
                        "photo_type": photo.photo_type,
                        "photo_date": photo.photo_date.isoformat(),
                        "notes": photo.notes,
                        "metadata": photo.metadata,
                    }
                )
                .execute()
            )
        if not response.data:
            raise PersistenceError("Failed to create photo record")
        return _row_to_record(response.data[0], fallback=photo)

    def get_photo(self, photo_id: UUID, owner_id: UUID) -> PhotoRecord | None:
        """Return the owner's photo, if present."""
        with _translate_errors("load photo record"):
            response = (
                self.client.table(_TABLE)
                .select(_COLUMNS)
                .eq("id", str(photo_id))
                .eq("user_id", str(owner_id))
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _row_to_record(response.data[0])

    def list_photos(self, owner_id: UUID, limit: int) -> list[PhotoRecord]:
        """Return the owner's photos, newest photo date first."""
        with _translate_errors("list photo records"):
            response = (
                self.client.table(_TABLE)
                .select(_COLUMNS)
                .eq("user_id", str(owner_id))
                .order("photo_date", desc=True)
                .order("created_at", desc=True)
                .limit(limit)
                .execute()
            )
        return [_row_to_record(row) for row in response.data or []]

    def update_access_url(
        self,
        photo_id: UUID,
        owner_id: UUID,
        signed_url: str,
        expires_at: datetime,
    ) -> None:
        """Store a freshly minted read URL on the row."""
        with _translate_errors("cache access URL"):
            self.client.table(_TABLE).update(
                {
                    "signed_url": signed_url,
                    "url_expires_at": expires_at.isoformat(),
                    "updated_at": self.clock().isoformat(),
                }
            ).eq("id", str(photo_id)).eq("user_id", str(owner_id)).execute()

    def delete_photo(self, photo_id: UUID, owner_id: UUID) -> bool:
        """Delete the owner's photo row and report whether one existed."""
        with _translate_errors("delete photo record"):
            response = (
                self.client.table(_TABLE)
                .delete()
                .eq("id", str(photo_id))
                .eq("user_id", str(owner_id))
                .execute()
            )
        return bool(response.data)


def _row_to_record(
    row: dict[str, object], fallback: NewPhoto | None = None
) -> PhotoRecord:
    """Map a progress_photos row, filling gaps from the inserted payload."""
    if fallback is not None:
        row = {
            "user_id": str(fallback.owner_id),
            "cloudflare_r2_key": fallback.object_key,
            "photo_type": fallback.photo_type,
            "photo_date": fallback.photo_date.isoformat(),
            "notes": fallback.notes,
            "metadata": fallback.metadata,
            **row,
        }
    return PhotoRecord(
        id=UUID(str(row["id"])),
        owner_id=UUID(str(row["user_id"])),
        object_key=str(row["cloudflare_r2_key"]),
        photo_type=row["photo_type"],
        photo_date=date.fromisoformat(str(row["photo_date"])[:10]),
        notes=row.get("notes"),
        cached_access_url=row.get("signed_url"),
        access_url_expires_at=_parse_timestamp(row.get("url_expires_at")),
        metadata=row.get("metadata") or {},
        created_at=_parse_timestamp(row.get("created_at")),
        updated_at=_parse_timestamp(row.get("updated_at")),
    )


def _parse_timestamp(value: object) -> datetime | None:
    if not value:
        return None
    parsed = datetime.fromisoformat(str(value))
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed
