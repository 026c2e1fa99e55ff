"""Directory search routes ("Connect" tab)."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from ..models import User
from ..schemas import DirectorySearchResponse, DirectorySearchResult, UserResponse
from ..services import SearchField, ServiceContainer, get_current_user, get_services
from .auth import to_user_response

router = APIRouter(prefix="/directory", tags=["directory"])


def _status_label(candidate: User, viewer: User) -> str:
    if candidate.id == viewer.id:
        return "self"
    if candidate.id in viewer.connections:
        return "connected"
    return "available"


@router.get("/search", response_model=DirectorySearchResponse)
async def search_directory(
    q: str = Query("", max_length=150, alias="query"),
    field: SearchField = Query("name"),
    current_user: User = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
) -> DirectorySearchResponse:
    query = q.strip()
    matches = services.directory.search(query, field)
    return DirectorySearchResponse(
        query=query,
        field=field,
        results=[
            DirectorySearchResult(
                id=candidate.id,
                full_name=candidate.full_name,
                email=candidate.email,
                major=candidate.major,
                status=_status_label(candidate, current_user),
            )
            for candidate in matches
        ],
    )


@router.get("/{user_id}", response_model=UserResponse)
async def directory_entry(
    user_id: str,
    current_user: User = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
) -> UserResponse:
    return to_user_response(services.directory.get(user_id))


__all__ = ["router"]
