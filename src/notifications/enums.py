"""Enums for the notification system."""

from django.db.models import TextChoices


class NotificationType(TextChoices):
    """Notifications the system can send."""

    BOOKING_CONFIRMED = "booking_confirmed"
    BOOKING_CANCELLED = "booking_cancelled"
