"""Fixed token table for local development."""

from dataclasses import dataclass, field
from uuid import UUID

from fitness_tracker.domain.models import CallerIdentity
from fitness_tracker.services.auth import IdentityVerifier


@dataclass
class StaticTokenIdentityVerifier(IdentityVerifier):
    """Accepts only the tokens it was configured with."""

    tokens: dict[str, UUID] = field(default_factory=dict)

    def verify(self, token: str) -> CallerIdentity | None:
        """Return the user mapped to the token, if any."""
        user_id = self.tokens.get(token)
        if user_id is None:
            return None
        return CallerIdentity(user_id=user_id)
