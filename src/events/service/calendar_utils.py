"""Calendar helpers for events."""

from datetime import datetime, timedelta
from datetime import timezone as dt_timezone
from urllib.parse import urlencode

from django.conf import settings

from events.models import Event

GOOGLE_CALENDAR_URL = "https://calendar.google.com/calendar/render"


def format_calendar_timestamp(value: datetime) -> str:
    """Format an aware datetime as ``YYYYMMDDTHHMMSSZ`` in UTC."""
    return value.astimezone(dt_timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def event_time_range(event: Event) -> tuple[datetime, datetime]:
    """Start and end of an event. Events carry no duration, so a fixed one is assumed."""
    start = event.starts_at
    return start, start + timedelta(hours=settings.EVENT_DEFAULT_DURATION_HOURS)


def build_calendar_link(event: Event, ticket_count: int) -> str:
    """Build a Google Calendar "add event" link for a booking."""
    start, end = event_time_range(event)
    noun = "ticket" if ticket_count == 1 else "tickets"
    params = {
        "action": "TEMPLATE",
        "text": event.title,
        "dates": f"{format_calendar_timestamp(start)}/{format_calendar_timestamp(end)}",
        "details": f"Booking for {event.title} ({ticket_count} {noun})",
        "location": event.location_name or "",
    }
    return f"{GOOGLE_CALENDAR_URL}?{urlencode(params)}"
