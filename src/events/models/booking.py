import typing as t
from decimal import Decimal

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from simple_history.models import HistoricalRecords

from common.models import TimeStampedModel

from .event import MAX_PRICE, Event


class BookingQuerySet(models.QuerySet["Booking"]):
    def active(self) -> t.Self:
        """Bookings that hold a seat, i.e. everything not cancelled."""
        return self.exclude(status=Booking.Status.CANCELLED)

    def for_event(self, event: Event) -> t.Self:
        return self.filter(event=event)

    def with_event(self) -> t.Self:
        return self.select_related("event")


class BookingManager(models.Manager["Booking"]):
    def get_queryset(self) -> BookingQuerySet:
        return BookingQuerySet(self.model, using=self._db)

    def active(self) -> BookingQuerySet:
        return self.get_queryset().active()

    def active_count(self, event: Event) -> int:
        return self.get_queryset().for_event(event).active().count()


class Booking(TimeStampedModel):
    """One ticket. A checkout of N tickets creates N identical rows."""

    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        CONFIRMED = "confirmed", "Confirmed"
        CANCELLED = "cancelled", "Cancelled"

    class PaymentMethod(models.TextChoices):
        FREE = "free", "Free"
        DIRECT = "direct", "Direct"

    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="bookings")
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="bookings")
    attendee_name = models.CharField(max_length=100)
    attendee_email = models.EmailField(max_length=255)
    amount = models.DecimalField(
        max_digits=7,
        decimal_places=2,
        default=Decimal("0"),
        validators=[MinValueValidator(Decimal("0")), MaxValueValidator(MAX_PRICE)],
    )
    payment_method = models.CharField(max_length=10, choices=PaymentMethod.choices, default=PaymentMethod.FREE)
    proof_of_payment = models.FileField(max_length=255, blank=True)
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.PENDING, db_index=True)

    objects = BookingManager()
    history = HistoricalRecords()

    class Meta:
        ordering = ["-created_at"]
        indexes = [models.Index(fields=["event", "status"], name="booking_event_status_idx")]

    def __str__(self) -> str:
        return f"{self.attendee_name} - {self.event_id} ({self.status})"
