"""
Admin endpoints for API v1.

Every route in this module requires a valid admin session (see
``core.security.require_admin``).  They expose the event list, event
creation, the statistics dashboard and the per‑event registration
detail.
"""

from fastapi import APIRouter, Depends, Path, status

from event_registration_api.app.core.security import require_admin
from event_registration_api.app.schemas.common import APIResponse
from event_registration_api.app.schemas.event import EventCreate
from event_registration_api.app.services.admin_service import AdminService
from event_registration_api.app.services.event_service import EventService


router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/events", response_model=APIResponse, response_model_exclude_none=True)
async def list_events() -> APIResponse:
    """List all events, active or not, most recently created first."""
    events = await EventService.list_events()
    return APIResponse(success=True, count=len(events), data=events)


@router.post(
    "/events",
    response_model=APIResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_event(event: EventCreate) -> APIResponse:
    """Create a new event.

    Requires ``name``, ``slug``, ``description`` and ``date``; team
    sizes default to 1..4.  Answers 409 if the name or slug is taken.
    """
    created = await EventService.create_event(event)
    return APIResponse(success=True, message="Event created successfully", data=created)


@router.get("/stats", response_model=APIResponse, response_model_exclude_none=True)
async def event_statistics() -> APIResponse:
    stats = await AdminService.compute_stats()
    return APIResponse(success=True, data=stats)


@router.get("/events/{event_name:path}", response_model=APIResponse, response_model_exclude_none=True)
async def event_detail(
    event_name: str = Path(..., min_length=1, description="Name of the event"),
) -> APIResponse:
    """Statistics and registrations with participants for one event."""
    detail = await AdminService.event_detail(event_name)
    return APIResponse(success=True, data=detail)
