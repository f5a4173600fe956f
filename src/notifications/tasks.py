"""Notification tasks."""

import typing as t

import structlog
from celery import shared_task
from django.template.loader import render_to_string

from common.tasks import send_email
from notifications.schema import BookingEmailPayload

logger = structlog.get_logger(__name__)

SUBJECTS = {
    "confirmed": "Booking confirmed: {event_title}",
    "cancelled": "Booking cancelled: {event_title}",
}


@shared_task
def send_booking_email(payload: dict[str, t.Any]) -> None:
    """Render and send a booking status email.

    Args:
        payload: A serialized BookingEmailPayload.
    """
    data = BookingEmailPayload.model_validate(payload)
    context = data.model_dump()
    body = render_to_string(f"notifications/emails/booking_{data.status}.txt", context)
    html_body = render_to_string(f"notifications/emails/booking_{data.status}.html", context)
    send_email.delay(
        to=str(data.to),
        subject=SUBJECTS[data.status].format(event_title=data.event_title),
        body=body,
        html_body=html_body,
    )
    logger.info("booking_email_queued", status=data.status, ticket_count=data.ticket_count)
