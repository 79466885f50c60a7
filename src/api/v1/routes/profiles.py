"""Profile directory API routes."""

import dataclasses
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status

from api.v1.dependencies import get_directory_controller
from api.v1.schemas.profile import (
    DirectoryOptionsResponse,
    ProfileDetailResponse,
    ProfileFormBody,
    ProfileFormPatch,
    ProfileFormResponse,
    ProfileListResponse,
    ProfilePageResponse,
    ProfileResponse,
)
from core.config import settings
from core.exceptions import ProfileValidationError
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.profile import DEFAULT_LEVEL, LANGUAGES, LEVELS, Profile
from domain.services.directory_controller import DirectoryController
from domain.services.query import SortKey

router = APIRouter(prefix="/profiles", tags=["profiles"])


def _to_response(controller: DirectoryController, profile: Profile) -> ProfileResponse:
    return ProfileResponse.from_entity(profile, controller.contact_link(profile))


def _form_response(controller: DirectoryController) -> ProfileFormResponse:
    return ProfileFormResponse(data=ProfileFormBody(**dataclasses.asdict(controller.form)))


@router.get(
    "",
    response_model=ProfilePageResponse,
    summary="Browse the directory",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_profiles(
    request: Request,
    q: str = Query("", description="Free-text search over name, bio, interests and languages"),
    native: str = Query("", description="Exact native language"),
    practice: str = Query("", description="Exact practice language"),
    sort_by: SortKey = Query(SortKey.RECENT),
    page: int = Query(1, description="Out-of-range pages are clamped"),
    page_size: int | None = Query(None, ge=1, le=settings.max_page_size),
    controller: DirectoryController = Depends(get_directory_controller),
) -> ProfilePageResponse:
    """Filter, sort and paginate the in-memory directory."""
    controller.set_filters(
        q=q,
        native=native,
        practice=practice,
        sort_by=sort_by,
        page=page,
        page_size=page_size or controller.filters.page_size,
    )
    result = controller.visible()
    return ProfilePageResponse.from_page(
        result, [_to_response(controller, p) for p in result.items]
    )


@router.get(
    "/options",
    response_model=DirectoryOptionsResponse,
    summary="Form and filter choices",
)
async def get_options() -> DirectoryOptionsResponse:
    """Languages, levels and sort orders the directory understands."""
    return DirectoryOptionsResponse(
        languages=list(LANGUAGES),
        levels=list(LEVELS),
        default_level=DEFAULT_LEVEL,
        sort_keys=list(SortKey),
    )


@router.get(
    "/export",
    summary="Download the directory as JSON",
    response_class=Response,
    responses={200: {"content": {"application/json": {}}}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def export_profiles(
    request: Request,
    controller: DirectoryController = Depends(get_directory_controller),
) -> Response:
    """Serialize every profile currently held in memory."""
    return Response(
        content=controller.export_file(),
        media_type="application/json",
        headers={
            "Content-Disposition": f'attachment; filename="{settings.export_filename}"'
        },
    )


@router.post(
    "/import",
    response_model=ProfileListResponse,
    summary="Import profiles from a JSON file",
    responses={
        200: {"description": "Directory replaced by the imported profiles"},
        400: {"description": "File is not a JSON array"},
        502: {"description": "Backend rejected the import"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def import_profiles(
    request: Request,
    controller: DirectoryController = Depends(get_directory_controller),
) -> ProfileListResponse:
    """Upload an exported file as the raw request body."""
    body = await request.body()
    saved = await controller.import_file(body)
    return ProfileListResponse(data=[_to_response(controller, p) for p in saved])


@router.get(
    "/form",
    response_model=ProfileFormResponse,
    summary="Current form contents",
)
async def get_form(
    controller: DirectoryController = Depends(get_directory_controller),
) -> ProfileFormResponse:
    return _form_response(controller)


@router.patch(
    "/form",
    response_model=ProfileFormResponse,
    summary="Change form fields",
    responses={422: {"description": "Unknown field or oversized value"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_form(
    request: Request,
    body: ProfileFormPatch,
    controller: DirectoryController = Depends(get_directory_controller),
) -> ProfileFormResponse:
    """Set each given field; nothing is normalized until the form is submitted."""
    for name, value in body.changes().items():
        controller.set_field(name, value)
    return _form_response(controller)


@router.post(
    "/form/reset",
    response_model=ProfileFormResponse,
    summary="Clear the form",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def reset_form(
    request: Request,
    controller: DirectoryController = Depends(get_directory_controller),
) -> ProfileFormResponse:
    controller.reset_form()
    return _form_response(controller)


@router.post(
    "/form/submit",
    response_model=ProfileDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Save the current form",
    responses={400: {"description": "Profile failed validation"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def submit_form(
    request: Request,
    controller: DirectoryController = Depends(get_directory_controller),
) -> ProfileDetailResponse:
    """Submit whatever the form holds; the form is cleared once saved."""
    saved = await controller.submit()
    return ProfileDetailResponse(data=_to_response(controller, saved))


@router.post(
    "",
    response_model=ProfileDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Save a profile",
    responses={
        201: {"description": "Profile saved"},
        400: {"description": "Profile failed validation"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_profile(
    request: Request,
    body: ProfileFormBody,
    controller: DirectoryController = Depends(get_directory_controller),
) -> ProfileDetailResponse:
    """Submit the form. A valid existing id updates that profile instead."""
    saved = await controller.submit(body.to_form())
    return ProfileDetailResponse(data=_to_response(controller, saved))


@router.put(
    "/{profile_id}",
    response_model=ProfileDetailResponse,
    summary="Update a profile",
    responses={
        200: {"description": "Profile updated"},
        400: {"description": "Profile failed validation"},
        404: {"description": "Profile not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_profile(
    request: Request,
    profile_id: UUID,
    body: ProfileFormBody,
    controller: DirectoryController = Depends(get_directory_controller),
) -> ProfileDetailResponse:
    """Submit an edited form for an existing profile."""
    if profile_id.version != 4:
        raise ProfileValidationError("Profile id must be a UUID v4")
    form = body.to_form()
    form.id = str(profile_id)
    saved = await controller.submit(form)
    return ProfileDetailResponse(data=_to_response(controller, saved))


@router.get(
    "/{profile_id}/form",
    response_model=ProfileFormResponse,
    summary="Load a profile into the form",
    responses={404: {"description": "Profile not found"}},
)
async def edit_profile(
    profile_id: UUID,
    controller: DirectoryController = Depends(get_directory_controller),
) -> ProfileFormResponse:
    """Form contents for editing, with interests joined back into one string."""
    controller.edit(profile_id)
    return _form_response(controller)


@router.delete(
    "/{profile_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a profile",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_profile(
    request: Request,
    profile_id: UUID,
    controller: DirectoryController = Depends(get_directory_controller),
) -> None:
    """Remove a profile from the backend, then from the directory."""
    await controller.delete(profile_id)
    return None


@router.delete(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Wipe the directory",
    responses={400: {"description": "Wipe was not confirmed"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def wipe_profiles(
    request: Request,
    confirm: bool = Query(False, description="Must be true to erase every profile"),
    controller: DirectoryController = Depends(get_directory_controller),
) -> None:
    """Permanently delete every profile, one backend request per row."""
    if not await controller.wipe_all(confirmed=confirm):
        raise ProfileValidationError("Wipe must be confirmed with confirm=true")
    return None
