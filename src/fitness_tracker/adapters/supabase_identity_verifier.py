"""Supabase Auth token verification."""

from dataclasses import dataclass
from uuid import UUID

import httpx
from supabase import AuthError as SupabaseAuthError
from supabase import Client

from fitness_tracker.domain.errors import IdentityProviderError
from fitness_tracker.domain.models import CallerIdentity
from fitness_tracker.services.auth import IdentityVerifier


@dataclass
class SupabaseIdentityVerifier(IdentityVerifier):
    """Resolves access tokens through the Supabase Auth API."""

    client: Client

    def verify(self, token: str) -> CallerIdentity | None:
        """Return the user for a valid access token."""
        try:
            response = self.client.auth.get_user(token)
        except SupabaseAuthError:
            return None
        except httpx.HTTPError as exc:
            raise IdentityProviderError() from exc
        if response is None or response.user is None:
            return None
        user = response.user
        return CallerIdentity(user_id=UUID(str(user.id)), email=user.email)
