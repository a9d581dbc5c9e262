"""Progress photo endpoints with bearer token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from fitness_tracker.api.photo_models import (
    PhotoResponse,
    PhotoUrlRequest,
    PhotoUrlResponse,
    UploadPhotoRequest,
    UploadPhotoResponse,
)
from fitness_tracker.domain.errors import ValidationError
from fitness_tracker.domain.models import CallerIdentity

if TYPE_CHECKING:
    from fitness_tracker.containers import AppContainer

router = APIRouter(tags=["photos"])

_BodyT = TypeVar("_BodyT", bound=BaseModel)

PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": (
        "authorization, x-client-info, apikey, content-type"
    ),
}


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def require_caller(
    request: Request,
    authorization: str | None = Header(default=None),
) -> CallerIdentity:
    """Resolve the Authorization header into the calling user."""
    return _container(request).auth_service.authenticate(authorization)


async def _parse_body(request: Request, model: type[_BodyT]) -> _BodyT:
    # JSON decoding and pydantic validation both raise ValueError subclasses.
    try:
        return model.model_validate(await request.json())
    except ValueError as exc:
        raise ValidationError("Invalid request body") from exc


async def upload_body(
    request: Request, _caller: CallerIdentity = Depends(require_caller)
) -> UploadPhotoRequest:
    """Parse the upload body once the caller is authenticated."""
    return await _parse_body(request, UploadPhotoRequest)


async def photo_url_body(
    request: Request, _caller: CallerIdentity = Depends(require_caller)
) -> PhotoUrlRequest:
    """Parse the photo URL body once the caller is authenticated."""
    return await _parse_body(request, PhotoUrlRequest)


@router.options("/upload-progress-photo")
@router.options("/get-photo-url")
async def preflight() -> PlainTextResponse:
    """Answer bare OPTIONS requests the way a CORS preflight is answered."""
    return PlainTextResponse("ok", headers=PREFLIGHT_HEADERS)


@router.post("/upload-progress-photo")
def upload_progress_photo(
    request: Request,
    caller: CallerIdentity = Depends(require_caller),
    body: UploadPhotoRequest = Depends(upload_body),
) -> UploadPhotoResponse:
    """Create a pending photo and return a direct-upload URL."""
    intent = _container(request).upload_intent_service.create_intent(
        caller,
        photo_type=body.photo_type,
        photo_date=body.photo_date,
        notes=body.notes,
    )
    return UploadPhotoResponse(
        photo_id=str(intent.photo_id),
        upload_url=intent.upload_url,
        expires_at=intent.expires_at.isoformat(),
    )


@router.post("/get-photo-url")
def get_photo_url(
    request: Request,
    caller: CallerIdentity = Depends(require_caller),
    body: PhotoUrlRequest = Depends(photo_url_body),
) -> PhotoUrlResponse:
    """Return a fresh read URL for one of the caller's photos."""
    access_url = _container(request).access_url_service.issue(caller, body.photo_id)
    return PhotoUrlResponse(
        signed_url=access_url.signed_url,
        expires_at=access_url.expires_at.isoformat(),
    )


@router.get("/progress-photos")
def list_progress_photos(
    request: Request,
    limit: int = 50,
    caller: CallerIdentity = Depends(require_caller),
) -> dict[str, list[PhotoResponse]]:
    """Return the caller's photos; cached URLs are included only while fresh."""
    service = _container(request).photo_library_service
    now = service.clock()
    photos = service.list_photos(caller, limit=limit)
    return {"photos": [PhotoResponse.from_record(photo, now) for photo in photos]}


@router.get("/progress-photos/{photo_id}")
def get_progress_photo(
    photo_id: str,
    request: Request,
    caller: CallerIdentity = Depends(require_caller),
) -> PhotoResponse:
    """Return one of the caller's photos."""
    service = _container(request).photo_library_service
    record = service.get_photo(caller, photo_id)
    return PhotoResponse.from_record(record, service.clock())


@router.delete("/progress-photos/{photo_id}")
def delete_progress_photo(
    photo_id: str,
    request: Request,
    caller: CallerIdentity = Depends(require_caller),
) -> dict[str, str]:
    """Delete one of the caller's photos."""
    _container(request).photo_library_service.delete_photo(caller, photo_id)
    return {"status": "deleted"}
