"""Fire-and-forget notification dispatch.

Notifications never affect the outcome of the action that triggered them: they are queued after
the surrounding transaction commits and any failure is logged and dropped.
"""

import typing as t
from datetime import date, time

import structlog
from django.db import transaction
from pydantic import ValidationError

from accounts.models import EncoreUser
from accounts.service.user_settings import UserSettingsStore
from notifications.enums import NotificationType
from notifications.schema import BookingEmailPayload

if t.TYPE_CHECKING:
    from events.models import Booking, Event

logger = structlog.get_logger(__name__)


def format_long_date(value: date) -> str:
    """E.g. ``Saturday, March 14, 2026``."""
    return f"{value:%A, %B} {value.day}, {value.year}"


def format_time(value: time | None) -> str:
    """E.g. ``7:30 PM``. Empty when the event has no time."""
    if value is None:
        return ""
    return f"{value.hour % 12 or 12}:{value:%M} {'AM' if value.hour < 12 else 'PM'}"


def build_booking_payload(
    event: "Event", *, attendee_name: str, attendee_email: str, status: str, ticket_count: int = 1
) -> BookingEmailPayload:
    return BookingEmailPayload.model_validate(
        {
            "to": attendee_email,
            "attendee_name": attendee_name,
            "event_title": event.title,
            "event_date": format_long_date(event.date),
            "event_time": format_time(event.time),
            "event_location": event.location_name,
            "status": str(status),
            "ticket_count": ticket_count,
        }
    )


def _send(notification_type: NotificationType, payload: dict[str, t.Any]) -> None:
    from notifications.tasks import send_booking_email

    try:
        send_booking_email.delay(payload)
    except Exception:
        logger.exception("notification_dispatch_failed", notification_type=notification_type)


def dispatch(notification_type: NotificationType | str, payload: BookingEmailPayload) -> None:
    """Queue a notification once the current transaction commits. Never raises."""
    notification_type = NotificationType(notification_type)
    data = payload.model_dump(mode="json")
    transaction.on_commit(lambda: _send(notification_type, data))
    logger.info("notification_scheduled", notification_type=notification_type)


def wants_email(user: EncoreUser) -> bool:
    return UserSettingsStore(user).load().email_notifications


def notify_booking_status(bookings: t.Sequence["Booking"], status: str) -> None:
    """Tell the attendee about a batch of bookings sharing event, attendee and status."""
    if not bookings:
        return
    first = bookings[0]
    if not wants_email(first.user):
        logger.info("notification_skipped_by_preference", user_id=str(first.user_id))
        return
    notification_type = (
        NotificationType.BOOKING_CONFIRMED if status == "confirmed" else NotificationType.BOOKING_CANCELLED
    )
    try:
        payload = build_booking_payload(
            first.event,
            attendee_name=first.attendee_name,
            attendee_email=first.attendee_email,
            status=status,
            ticket_count=len(bookings),
        )
    except ValidationError:
        logger.exception("notification_payload_invalid", booking_id=str(first.id))
        return
    dispatch(notification_type, payload)
