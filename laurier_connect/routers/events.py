"""Campus event routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ..models import Event, User
from ..schemas import AttendResponse, AuthorSummary, EventCreate, EventListResponse, EventResponse
from ..services import ServiceContainer, get_current_user, get_services

router = APIRouter(prefix="/events", tags=["events"])


def _to_event_response(event: Event) -> EventResponse:
    return EventResponse(
        id=event.id,
        title=event.title,
        description=event.description,
        location=event.location,
        start_time=event.start_time,
        end_time=event.end_time,
        creator_id=event.creator_id,
        attendees=[AuthorSummary(id=user.id, full_name=user.full_name, major=user.major) for user in event.attendees],
    )


@router.get("/", response_model=EventListResponse)
async def list_events_endpoint(
    current_user: User = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
) -> EventListResponse:
    return EventListResponse(items=[_to_event_response(event) for event in services.events.list_events()])


@router.post("/", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event_endpoint(
    payload: EventCreate,
    current_user: User = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
) -> EventResponse:
    event = services.events.create_event(
        creator=current_user,
        title=payload.title,
        description=payload.description,
        location=payload.location,
        start_time=payload.start_time,
        end_time=payload.end_time,
    )
    return _to_event_response(event)


@router.get("/{event_id}", response_model=EventResponse)
async def event_detail_endpoint(
    event_id: str,
    current_user: User = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
) -> EventResponse:
    return _to_event_response(services.events.get_event(event_id))


@router.post("/{event_id}/attend", response_model=AttendResponse)
async def attend_event_endpoint(
    event_id: str,
    current_user: User = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
) -> AttendResponse:
    changed = services.events.attend_event(event_id, current_user)
    event = services.events.get_event(event_id)
    return AttendResponse(event=_to_event_response(event), status="attending" if changed else "noop")


__all__ = ["router"]
