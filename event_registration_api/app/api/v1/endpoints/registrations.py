"""
Registration endpoints for API v1.

The public form posts here.  The event name is taken from the path
(FastAPI URL‑decodes it); the body is the form as described by
``RegistrationSubmit``.
"""

from fastapi import APIRouter, Path, status

from event_registration_api.app.schemas.common import APIResponse
from event_registration_api.app.schemas.registration import RegistrationSubmit
from event_registration_api.app.services.registration_service import RegistrationService


router = APIRouter()


@router.post(
    "/{event_name:path}",
    response_model=APIResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def submit_registration(
    payload: RegistrationSubmit,
    event_name: str = Path(..., min_length=1, description="Name of the event"),
) -> APIResponse:
    """Register a solo participant or a team for an event.

    Answers 400 when a rule is violated, 409 when the leader email is
    already registered for this event and 500 when the store fails.
    """
    result = await RegistrationService.submit(event_name, payload)
    return APIResponse(success=True, message="Registration successful!", data=result)


@router.get("/{event_name:path}", response_model=APIResponse, response_model_exclude_none=True)
async def list_registrations(
    event_name: str = Path(..., min_length=1, description="Name of the event"),
) -> APIResponse:
    """List the registrations of an event, newest first."""
    registrations = await RegistrationService.list_registrations(event_name)
    return APIResponse(success=True, count=len(registrations), data=registrations)
