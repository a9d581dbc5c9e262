"""Error taxonomy for the photo pipeline."""


class PhotoError(Exception):
    """Base error carrying a stable kind and the HTTP status it maps to."""

    kind = "internal_error"
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthError(PhotoError):
    """Missing or invalid credentials."""

    kind = "auth_error"
    status_code = 401
    default_message = "Unauthorized"


class ValidationError(PhotoError):
    """Malformed or missing input fields."""

    kind = "validation_error"
    status_code = 400
    default_message = "Invalid request"


class NotFoundOrForbidden(PhotoError):
    """The record does not exist or belongs to someone else."""

    kind = "not_found"
    status_code = 404
    default_message = "Photo not found or access denied"


class StorageError(PhotoError):
    """Object store unavailable or rejecting our credentials."""

    kind = "storage_error"
    status_code = 500
    default_message = "Object storage unavailable"


class PersistenceError(PhotoError):
    """Database read or write failure."""

    kind = "persistence_error"
    status_code = 500
    default_message = "Database operation failed"


class IdentityProviderError(PhotoError):
    """The auth provider could not be reached to verify a token."""

    kind = "identity_provider_error"
    status_code = 500
    default_message = "Authentication service unavailable"
