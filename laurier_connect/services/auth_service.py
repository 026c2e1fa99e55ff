"""Caller identity and account bootstrap.

Identity verification belongs to an external provider which forwards the
verified user id in the ``X-User-Id`` header. This module only resolves that
id against the directory; it never checks passwords.
"""
from __future__ import annotations

import logging

from fastapi import Depends, Header, HTTPException, status

from ..errors import NotFoundError
from ..models import User
from .container import ServiceContainer, get_services
from .directory_service import UserDirectory

logger = logging.getLogger(__name__)

USER_ID_HEADER = "X-User-Id"


def sign_up(directory: UserDirectory, *, email: str, full_name: str, major: str) -> User:
    """Register a new student record."""

    return directory.register(email=email, full_name=full_name, major=major)


def log_in(directory: UserDirectory, *, email: str) -> User:
    """Return the user registered under ``email`` after checking its domain."""

    normalized = directory.validate_email(email)
    user = directory.find_by_email(normalized)
    if user is None:
        raise NotFoundError("No account found for this email")
    logger.info("User %s logged in", user.id)
    return user


def get_current_user(
    x_user_id: str | None = Header(default=None, alias=USER_ID_HEADER),
    services: ServiceContainer = Depends(get_services),
) -> User:
    if not x_user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing user identity")
    try:
        return services.directory.get(x_user_id.strip())
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unknown user") from exc


__all__ = ["USER_ID_HEADER", "get_current_user", "log_in", "sign_up"]
