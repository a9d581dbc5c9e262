"""Domain models for the fitness tracker."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class CallerIdentity:
    """Represents the authenticated user behind a request."""

    user_id: UUID
    email: str | None = None
