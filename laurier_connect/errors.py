"""Domain exceptions raised by the service layer.

Each error carries the HTTP status the API should answer with, so services
stay free of web framework imports while routers can surface them unchanged.
"""
from __future__ import annotations


class ConnectError(Exception):
    """Base class for recoverable domain errors."""

    status_code: int = 400
    code: str = "error"
    default_message: str = "Request could not be completed."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInputError(ConnectError):
    """A required field is empty or malformed."""

    code = "invalid_input"
    default_message = "Invalid input."


class EmptyContentError(InvalidInputError):
    code = "empty_content"
    default_message = "Content must not be empty."


class InvalidRangeError(ConnectError):
    """An event ends at or before the time it starts."""

    status_code = 422
    code = "invalid_range"
    default_message = "End time must be after start time."


class InvalidGroupError(ConnectError):
    status_code = 422
    code = "invalid_group"
    default_message = "Groups need a name and at least two participants."


class NotConnectedError(ConnectError):
    """The caller tried to message a user they are not connected to."""

    status_code = 403
    code = "not_connected"
    default_message = "You must be connected to message this user."


class NotParticipantError(ConnectError):
    status_code = 403
    code = "not_participant"
    default_message = "You are not part of this chat."


class NotFoundError(ConnectError):
    status_code = 404
    code = "not_found"
    default_message = "Resource not found."


__all__ = [
    "ConnectError",
    "InvalidInputError",
    "EmptyContentError",
    "InvalidRangeError",
    "InvalidGroupError",
    "NotConnectedError",
    "NotParticipantError",
    "NotFoundError",
]
