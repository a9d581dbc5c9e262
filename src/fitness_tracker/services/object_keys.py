"""Owner-scoped object key generation."""

import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

from fitness_tracker.clock import utc_now

_TIMESTAMP_FORMAT = "%Y-%m-%dT%H-%M-%S-%fZ"


@dataclass
class ObjectKeyGenerator:
    """Builds keys of the form <namespace>/<owner>/<timestamp>-<random>.

    The timestamp sorts lexically in issue order and never repeats within a
    generator; the random suffix is a UUID4 so keys from separate processes
    don't collide either.
    """

    namespace: str = "progress-photos"
    clock: Callable[[], datetime] = utc_now
    _last_issued: datetime | None = field(default=None, init=False, repr=False)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False
    )

    def generate(self, owner_id: UUID) -> str:
        """Return a fresh storage key for the owner."""
        stamp = self._next_timestamp().strftime(_TIMESTAMP_FORMAT)
        return f"{self.namespace}/{owner_id}/{stamp}-{uuid4().hex}"

    def owner_prefix(self, owner_id: UUID) -> str:
        """Return the key prefix shared by every object of the owner."""
        return f"{self.namespace}/{owner_id}/"

    def _next_timestamp(self) -> datetime:
        now = self.clock().astimezone(UTC)
        with self._lock:
            if self._last_issued is not None and now <= self._last_issued:
                now = self._last_issued + timedelta(microseconds=1)
            self._last_issued = now
        return now
