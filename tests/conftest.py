"""Shared test fixtures."""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import UUID

import pytest
from fastapi.testclient import TestClient

from fitness_tracker.adapters.memory_object_storage import InMemoryObjectStorage
from fitness_tracker.adapters.memory_photo_repository import InMemoryPhotoRepository
from fitness_tracker.adapters.static_token_verifier import StaticTokenIdentityVerifier
from fitness_tracker.api.app import create_app
from fitness_tracker.config import Settings
from fitness_tracker.containers import AppContainer, Backend, build_container
from fitness_tracker.domain.errors import PersistenceError, StorageError
from fitness_tracker.domain.models import CallerIdentity
from fitness_tracker.domain.photos import NewPhoto, PhotoRecord
from fitness_tracker.services.access_urls import AccessUrlService
from fitness_tracker.services.object_keys import ObjectKeyGenerator
from fitness_tracker.services.photos import PhotoLibraryService
from fitness_tracker.services.uploads import UploadIntentService

OWNER_A = UUID("7d4c2a0e-3f5b-4d8e-9a61-0b2f3c4d5e6f")
OWNER_B = UUID("1a2b3c4d-5e6f-4a7b-8c9d-0e1f2a3b4c5d")
TOKEN_A = "token-user-a"
TOKEN_B = "token-user-b"


@dataclass
class FrozenClock:
    """Clock that only moves when told to."""

    now: datetime = field(
        default_factory=lambda: datetime(2024, 6, 1, 12, 0, tzinfo=UTC)
    )

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@dataclass
class FailingObjectStorage(InMemoryObjectStorage):
    """Object storage whose credentials are rejected."""

    def presign_upload(self, key: str, content_type: str, expires_in: int) -> str:
        raise StorageError("Failed to generate presigned URL")

    def presign_download(self, key: str, expires_in: int) -> str:
        raise StorageError("Failed to generate presigned URL")

    def delete_object(self, key: str) -> None:
        raise StorageError("Failed to delete stored object")


@dataclass
class FailingInsertRepository(InMemoryPhotoRepository):
    """Repository whose inserts fail."""

    def create_photo(self, photo: NewPhoto) -> PhotoRecord:
        raise PersistenceError("Failed to create photo record")


@dataclass
class FailingCacheRepository(InMemoryPhotoRepository):
    """Repository that can read rows but not update them."""

    def update_access_url(
        self,
        photo_id: UUID,
        owner_id: UUID,
        signed_url: str,
        expires_at: datetime,
    ) -> None:
        raise PersistenceError("Failed to cache access URL")


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
def app_logs(
    caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> pytest.LogCaptureFixture:
    monkeypatch.setattr(logging.getLogger("fitness_tracker"), "propagate", True)
    caplog.set_level(logging.INFO, logger="fitness_tracker")
    return caplog


@pytest.fixture
def caller_a() -> CallerIdentity:
    return CallerIdentity(user_id=OWNER_A)


@pytest.fixture
def caller_b() -> CallerIdentity:
    return CallerIdentity(user_id=OWNER_B)


@pytest.fixture
def photo_repository(clock: FrozenClock) -> InMemoryPhotoRepository:
    return InMemoryPhotoRepository(clock=clock)


@pytest.fixture
def object_storage(clock: FrozenClock) -> InMemoryObjectStorage:
    return InMemoryObjectStorage(clock=clock)


@pytest.fixture
def upload_service(
    photo_repository: InMemoryPhotoRepository,
    object_storage: InMemoryObjectStorage,
    clock: FrozenClock,
) -> UploadIntentService:
    return UploadIntentService(
        repository=photo_repository,
        storage=object_storage,
        key_generator=ObjectKeyGenerator(clock=clock),
        clock=clock,
    )


@pytest.fixture
def access_url_service(
    photo_repository: InMemoryPhotoRepository,
    object_storage: InMemoryObjectStorage,
    clock: FrozenClock,
) -> AccessUrlService:
    return AccessUrlService(
        repository=photo_repository, storage=object_storage, clock=clock
    )


@pytest.fixture
def library_service(
    photo_repository: InMemoryPhotoRepository,
    object_storage: InMemoryObjectStorage,
    access_url_service: AccessUrlService,
    clock: FrozenClock,
) -> PhotoLibraryService:
    return PhotoLibraryService(
        repository=photo_repository,
        storage=object_storage,
        access_url_service=access_url_service,
        clock=clock,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        backend="memory",
        dev_tokens=f"{TOKEN_A}:{OWNER_A},{TOKEN_B}:{OWNER_B}",
    )


@pytest.fixture
def backend() -> Backend:
    return Backend(
        verifier=StaticTokenIdentityVerifier({TOKEN_A: OWNER_A, TOKEN_B: OWNER_B}),
        repository=InMemoryPhotoRepository(),
        storage=InMemoryObjectStorage(),
    )


@pytest.fixture
def container(settings: Settings, backend: Backend) -> AppContainer:
    return build_container(settings, backend=backend)


@pytest.fixture
def client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))


def auth_headers(token: str = TOKEN_A) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
