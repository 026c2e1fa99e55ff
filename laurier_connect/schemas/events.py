"""Schemas for campus events."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from .posts import AuthorSummary


class EventCreate(BaseModel):
    title: str = Field(..., max_length=120)
    description: str = Field(default="", max_length=1000)
    location: str = Field(..., max_length=200)
    start_time: datetime
    end_time: datetime


class EventResponse(BaseModel):
    id: str
    title: str
    description: str
    location: str
    start_time: datetime
    end_time: datetime
    creator_id: str
    attendees: list[AuthorSummary]


class EventListResponse(BaseModel):
    items: list[EventResponse]


class AttendResponse(BaseModel):
    event: EventResponse
    status: str


__all__ = ["EventCreate", "EventResponse", "EventListResponse", "AttendResponse"]
