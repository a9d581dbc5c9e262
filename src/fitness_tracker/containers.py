"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from fitness_tracker.adapters.memory_object_storage import InMemoryObjectStorage
from fitness_tracker.adapters.memory_photo_repository import InMemoryPhotoRepository
from fitness_tracker.adapters.r2_object_storage import R2ObjectStorage
from fitness_tracker.adapters.static_token_verifier import StaticTokenIdentityVerifier
from fitness_tracker.adapters.supabase_identity_verifier import (
    SupabaseIdentityVerifier,
)
from fitness_tracker.adapters.supabase_photo_repository import SupabasePhotoRepository
from fitness_tracker.config import Settings, parse_dev_tokens
from fitness_tracker.services.access_urls import AccessUrlService
from fitness_tracker.services.auth import AuthService, IdentityVerifier
from fitness_tracker.services.object_keys import ObjectKeyGenerator
from fitness_tracker.services.photos import PhotoLibraryService
from fitness_tracker.services.storage import ObjectStorage, PhotoRepository
from fitness_tracker.services.uploads import UploadIntentService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_service: AuthService
    upload_intent_service: UploadIntentService
    access_url_service: AccessUrlService
    photo_library_service: PhotoLibraryService


@dataclass(frozen=True)
class Backend:
    """The three swappable collaborators behind the services."""

    verifier: IdentityVerifier
    repository: PhotoRepository
    storage: ObjectStorage


def build_supabase_backend(settings: Settings) -> Backend:
    """Create the Supabase + Cloudflare R2 backend."""
    missing = [
        name
        for name in (
            "supabase_url",
            "supabase_service_key",
            "r2_endpoint",
            "r2_access_key_id",
            "r2_secret_access_key",
        )
        if not getattr(settings, name)
    ]
    if missing:
        raise ValueError(
            f"Missing settings for supabase backend: {', '.join(missing)}"
        )
    supabase_client = create_client(
        settings.supabase_url, settings.supabase_service_key
    )
    storage = R2ObjectStorage.create(
        endpoint_url=settings.r2_endpoint,
        access_key_id=settings.r2_access_key_id,
        secret_access_key=settings.r2_secret_access_key,
        bucket_name=settings.r2_bucket_name,
        region_name=settings.r2_region,
    )
    return Backend(
        verifier=SupabaseIdentityVerifier(supabase_client),
        repository=SupabasePhotoRepository(supabase_client),
        storage=storage,
    )


def build_memory_backend(settings: Settings) -> Backend:
    """Create the in-memory backend used for local development and tests."""
    return Backend(
        verifier=StaticTokenIdentityVerifier(parse_dev_tokens(settings.dev_tokens)),
        repository=InMemoryPhotoRepository(),
        storage=InMemoryObjectStorage(bucket_name=settings.r2_bucket_name),
    )


_BACKENDS = {
    "supabase": build_supabase_backend,
    "memory": build_memory_backend,
}


def build_container(
    settings: Settings | None = None, backend: Backend | None = None
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    resolved_backend = backend or _BACKENDS[resolved_settings.backend](
        resolved_settings
    )
    access_url_service = AccessUrlService(
        repository=resolved_backend.repository,
        storage=resolved_backend.storage,
        ttl_seconds=resolved_settings.access_url_ttl_seconds,
    )
    upload_intent_service = UploadIntentService(
        repository=resolved_backend.repository,
        storage=resolved_backend.storage,
        key_generator=ObjectKeyGenerator(
            namespace=resolved_settings.object_key_namespace
        ),
        ttl_seconds=resolved_settings.upload_url_ttl_seconds,
        content_type=resolved_settings.upload_content_type,
    )
    photo_library_service = PhotoLibraryService(
        repository=resolved_backend.repository,
        storage=resolved_backend.storage,
        access_url_service=access_url_service,
    )
    return AppContainer(
        settings=resolved_settings,
        auth_service=AuthService(resolved_backend.verifier),
        upload_intent_service=upload_intent_service,
        access_url_service=access_url_service,
        photo_library_service=photo_library_service,
    )
