"""
Public event endpoints for API v1.

Only active events are visible here; the admin endpoints list every
event.
"""

from fastapi import APIRouter

from event_registration_api.app.schemas.common import APIResponse
from event_registration_api.app.services.event_service import EventService


router = APIRouter()


@router.get("/", response_model=APIResponse, response_model_exclude_none=True)
async def list_active_events() -> APIResponse:
    events = await EventService.list_events(active_only=True)
    return APIResponse(success=True, count=len(events), data=events)


@router.get("/{slug}", response_model=APIResponse, response_model_exclude_none=True)
async def get_event(slug: str) -> APIResponse:
    """Fetch one active event by slug; 404 if there is none."""
    event = await EventService.get_event_by_slug(slug)
    return APIResponse(success=True, data=event)
