"""Payload schemas for notifications."""

import typing as t

from pydantic import BaseModel, Field


class BookingEmailPayload(BaseModel):
    """Everything the booking email templates render."""

    to: str = Field(..., min_length=1, description="Attendee address, already validated by the booking model")
    attendee_name: str
    event_title: str
    event_date: str = Field(..., description="Long form, e.g. 'Saturday, March 14, 2026'")
    event_time: str = ""
    event_location: str = ""
    status: t.Literal["confirmed", "cancelled"]
    ticket_count: int = Field(1, ge=1)
