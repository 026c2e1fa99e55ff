"""Connection management routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ..models import User
from ..schemas import ConnectionListResponse, ConnectionStatusResponse
from ..services import ServiceContainer, get_current_user, get_services
from .auth import to_user_response

router = APIRouter(prefix="/connections", tags=["connections"])


@router.get("/", response_model=ConnectionListResponse)
async def list_connections_endpoint(
    current_user: User = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
) -> ConnectionListResponse:
    connected = services.connections.list_connections(current_user.id)
    return ConnectionListResponse(connections=[to_user_response(user) for user in connected])


@router.get("/{user_id}", response_model=ConnectionStatusResponse)
async def connection_status_endpoint(
    user_id: str,
    current_user: User = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
) -> ConnectionStatusResponse:
    return ConnectionStatusResponse(user_id=user_id, connected=services.connections.is_connected(current_user.id, user_id))


@router.post("/{user_id}", response_model=ConnectionStatusResponse, status_code=status.HTTP_201_CREATED)
async def connect_endpoint(
    user_id: str,
    current_user: User = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
) -> ConnectionStatusResponse:
    changed = services.connections.connect(current_user.id, user_id)
    return ConnectionStatusResponse(user_id=user_id, connected=True, status="connected" if changed else "noop")


@router.delete("/{user_id}", response_model=ConnectionStatusResponse)
async def disconnect_endpoint(
    user_id: str,
    current_user: User = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
) -> ConnectionStatusResponse:
    changed = services.connections.disconnect(current_user.id, user_id)
    return ConnectionStatusResponse(user_id=user_id, connected=False, status="disconnected" if changed else "noop")


__all__ = ["router"]
