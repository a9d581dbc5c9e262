"""In-memory object storage for local development and tests."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from urllib.parse import quote
from uuid import uuid4

from fitness_tracker.clock import utc_now
from fitness_tracker.services.storage import ObjectStorage


@dataclass(frozen=True)
class IssuedUrl:
    """A URL handed out by the in-memory store."""

    key: str
    method: str
    expires_at: datetime
    content_type: str | None = None


@dataclass
class InMemoryObjectStorage(ObjectStorage):
    """Dict-backed store that issues unique, expiring fake URLs."""

    bucket_name: str = "progress-photos"
    clock: Callable[[], datetime] = utc_now
    objects: dict[str, bytes] = field(default_factory=dict)
    issued: dict[str, IssuedUrl] = field(default_factory=dict)

    def presign_upload(self, key: str, content_type: str, expires_in: int) -> str:
        """Return a fake PUT URL for the key."""
        return self._issue(key, "PUT", expires_in, content_type)

    def presign_download(self, key: str, expires_in: int) -> str:
        """Return a fake GET URL for the key."""
        return self._issue(key, "GET", expires_in)

    def delete_object(self, key: str) -> None:
        """Drop the object if it was uploaded."""
        self.objects.pop(key, None)

    def put_object(self, url: str, content: bytes) -> None:
        """Simulate a client uploading bytes through a presigned PUT URL."""
        issued = self.issued.get(url)
        if issued is None or issued.method != "PUT" or not self.is_valid(url):
            raise PermissionError("Upload URL is invalid or expired")
        self.objects[issued.key] = content

    def is_valid(self, url: str, now: datetime | None = None) -> bool:
        """Return True while the URL would still be honoured."""
        issued = self.issued.get(url)
        if issued is None:
            return False
        return (now or self.clock()) < issued.expires_at

    def _issue(
        self,
        key: str,
        method: str,
        expires_in: int,
        content_type: str | None = None,
    ) -> str:
        url = (
            f"memory://{self.bucket_name}/{quote(key)}"
            f"?method={method}&expires={expires_in}&signature={uuid4().hex}"
        )
        self.issued[url] = IssuedUrl(
            key=key,
            method=method,
            expires_at=self.clock() + timedelta(seconds=expires_in),
            content_type=content_type,
        )
        return url
