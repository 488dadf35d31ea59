"""Press kit API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, Request, UploadFile, status
from pydantic import BaseModel

from src.api.dependencies import (
    get_analytics_service,
    get_current_user,
    get_owned_press_kit,
    get_press_kit_service,
)
from src.models.press_kit import PressKit
from src.models.user import User
from src.schemas.analytics import AnalyticsSummary
from src.schemas.common import DataResponse, ListEnvelope
from src.schemas.media import MediaResponse
from src.schemas.press_kit import (
    PressKitCreate,
    PressKitDetailResponse,
    PressKitResponse,
    PressKitUpdate,
)
from src.services.analytics_service import AnalyticsService
from src.services.press_kit_service import PressKitService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/press-kits", tags=["press-kits"])


def _queue_view(
    press_kit_id: int, visitor_ip: str | None, user_agent: str | None, referrer: str
) -> None:
    """Hand the view record to a worker. Runs after the response is sent."""
    from src.tasks.analytics import record_press_kit_view

    try:
        record_press_kit_view.delay(
            press_kit_id, visitor_ip=visitor_ip, user_agent=user_agent, referrer=referrer
        )
    except Exception as e:
        logger.warning(f"Could not queue view for press kit {press_kit_id}: {e}")


def _fields(body: BaseModel, partial: bool = False) -> dict:
    """Top-level body fields as JSON values. A null field is left unchanged.

    Nested models are dumped whole so their defaults are kept. On a partial
    update only the customization keys actually sent are returned, to be
    merged over the stored styling.
    """
    include = body.model_fields_set if partial else None
    fields = {
        k: v for k, v in body.model_dump(mode="json", include=include).items() if v is not None
    }
    if partial and "customization" in fields:
        fields["customization"] = body.customization.model_dump(mode="json", exclude_unset=True)
    return fields


@router.get("", response_model=ListEnvelope[PressKitResponse])
def list_press_kits(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[PressKitService, Depends(get_press_kit_service)],
):
    """Get all press kits owned by the current user."""
    press_kits = service.list_owned(current_user.id)
    return ListEnvelope(
        count=len(press_kits),
        data=[PressKitResponse.model_validate(pk) for pk in press_kits],
    )


@router.get("/public/{slug}", response_model=DataResponse[PressKitDetailResponse])
def get_public_press_kit(
    slug: str,
    request: Request,
    background_tasks: BackgroundTasks,
    service: Annotated[PressKitService, Depends(get_press_kit_service)],
    password: str | None = None,
):
    """Get a published press kit by slug (no authentication)."""
    press_kit = service.get_public_by_slug(slug, password=password)
    detail = service.get_with_media(press_kit)
    background_tasks.add_task(
        _queue_view,
        press_kit.id,
        request.client.host if request.client else None,
        request.headers.get("user-agent"),
        request.headers.get("referer", ""),
    )
    return DataResponse(data=detail)


@router.post(
    "",
    response_model=DataResponse[PressKitResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_press_kit(
    press_kit_data: PressKitCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[PressKitService, Depends(get_press_kit_service)],
):
    """Create a new press kit."""
    press_kit = service.create(current_user, _fields(press_kit_data))
    return DataResponse(data=PressKitResponse.model_validate(press_kit))


@router.get("/{press_kit_id}", response_model=DataResponse[PressKitDetailResponse])
def get_press_kit(
    press_kit: Annotated[PressKit, Depends(get_owned_press_kit)],
    service: Annotated[PressKitService, Depends(get_press_kit_service)],
):
    """Get a press kit with its media (owner or admin)."""
    return DataResponse(data=service.get_with_media(press_kit))


@router.put("/{press_kit_id}", response_model=DataResponse[PressKitResponse])
def update_press_kit(
    press_kit_data: PressKitUpdate,
    press_kit: Annotated[PressKit, Depends(get_owned_press_kit)],
    service: Annotated[PressKitService, Depends(get_press_kit_service)],
):
    """Update a press kit. Omitted fields are left unchanged."""
    press_kit = service.update(press_kit, _fields(press_kit_data, partial=True))
    return DataResponse(data=PressKitResponse.model_validate(press_kit))


@router.delete("/{press_kit_id}", response_model=DataResponse[dict])
def delete_press_kit(
    press_kit: Annotated[PressKit, Depends(get_owned_press_kit)],
    service: Annotated[PressKitService, Depends(get_press_kit_service)],
):
    """Delete a press kit with its media and analytics."""
    service.delete(press_kit)
    return DataResponse(data={})


@router.post(
    "/{press_kit_id}/media",
    response_model=DataResponse[MediaResponse],
    status_code=status.HTTP_201_CREATED,
)
async def upload_media(
    press_kit: Annotated[PressKit, Depends(get_owned_press_kit)],
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[PressKitService, Depends(get_press_kit_service)],
    type: Annotated[str, Form()],
    title: Annotated[str, Form()],
    description: Annotated[str | None, Form()] = None,
    file: Annotated[UploadFile | None, File()] = None,
):
    """Upload an image, audio, video or document file to a press kit.

    Note: This endpoint must remain async because UploadFile.read() is async.
    """
    data = None
    if file is not None:
        # One byte past the ceiling is enough to know the file is too large.
        data = await file.read(service.max_upload_bytes + 1)

    media = service.upload_media(
        press_kit,
        current_user,
        media_type=type,
        title=title,
        description=description,
        filename=file.filename if file is not None else None,
        content_type=file.content_type if file is not None else None,
        data=data,
    )
    return DataResponse(data=MediaResponse.model_validate(media))


@router.delete("/{press_kit_id}/media/{media_id}", response_model=DataResponse[dict])
def delete_media(
    media_id: int,
    press_kit: Annotated[PressKit, Depends(get_owned_press_kit)],
    service: Annotated[PressKitService, Depends(get_press_kit_service)],
):
    """Delete one media item from a press kit."""
    service.delete_media(press_kit, media_id)
    return DataResponse(data={})


@router.get("/{press_kit_id}/analytics", response_model=DataResponse[AnalyticsSummary])
def get_press_kit_analytics(
    press_kit: Annotated[PressKit, Depends(get_owned_press_kit)],
    analytics: Annotated[AnalyticsService, Depends(get_analytics_service)],
):
    """Get aggregated view counters for a press kit."""
    return DataResponse(data=AnalyticsSummary(**analytics.summarize(press_kit.id)))
