"""Bearer token authentication."""

from dataclasses import dataclass
from typing import Protocol

from fitness_tracker.domain.errors import AuthError
from fitness_tracker.domain.models import CallerIdentity


class IdentityVerifier(Protocol):
    """Maps an access token to the user it was issued for."""

    def verify(self, token: str) -> CallerIdentity | None:
        """Return the caller for a valid token, None when it is rejected."""


@dataclass
class AuthService:
    """Resolves Authorization headers into caller identities."""

    verifier: IdentityVerifier

    def authenticate(self, authorization: str | None) -> CallerIdentity:
        """Return the caller behind the header or raise AuthError."""
        if authorization is None or not authorization.strip():
            raise AuthError("Missing authorization header")
        scheme, _, token = authorization.strip().partition(" ")
        token = token.strip()
        if scheme.lower() != "bearer" or not token:
            raise AuthError()
        caller = self.verifier.verify(token)
        if caller is None:
            raise AuthError()
        return caller
