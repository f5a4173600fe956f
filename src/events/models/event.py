import typing as t
from datetime import datetime, time
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from django.conf import settings
from django.contrib.auth.models import AnonymousUser
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Count, Q
from django.utils import timezone
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError
from simple_history.models import HistoricalRecords

from common.models import ExifStripMixin, TimeStampedModel

from .mixins import LocationMixin, image_validators

MAX_PRICE = Decimal("10000")
CENT = Decimal("0.01")


def parse_price(raw: t.Any) -> Decimal:
    """Parse a free-text price rounded to cents. Anything unparseable, negative or non-finite counts as 0."""
    if raw is None:
        return Decimal("0")
    try:
        value = Decimal(str(raw).strip().lstrip("$").replace(",", ""))
        if not value.is_finite() or value < 0:
            return Decimal("0")
        return value.quantize(CENT, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError):
        return Decimal("0")


def _aware(value: datetime) -> datetime:
    if timezone.is_naive(value):
        return timezone.make_aware(value, timezone.get_default_timezone())
    return value


class PriceTier(BaseModel):
    """A named price option for an event, optionally bounded in time."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=100)
    price: str = Field("0", max_length=32)
    quantity: str = Field("", max_length=32)
    start_date: datetime | None = None
    end_date: datetime | None = None

    @field_validator("price", "quantity", mode="before")
    @classmethod
    def _stringify(cls, value: t.Any) -> t.Any:
        if isinstance(value, (int, float, Decimal)):
            return str(value)
        return "" if value is None else value

    @property
    def parsed_price(self) -> Decimal:
        return parse_price(self.price)

    def is_expired(self, now: datetime) -> bool:
        return self.end_date is not None and _aware(self.end_date) < now

    def has_started(self, now: datetime) -> bool:
        return self.start_date is None or _aware(self.start_date) <= now

    def is_selectable(self, now: datetime) -> bool:
        return self.has_started(now) and not self.is_expired(now)


class PaymentInstructions(BaseModel):
    """Handles for the external payment apps an organizer accepts."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    venmo: str | None = Field(None, max_length=100)
    cashapp: str | None = Field(None, max_length=100)
    zelle: str | None = Field(None, max_length=100)
    paypal: str | None = Field(None, max_length=100)


_price_tiers_adapter = TypeAdapter(list[PriceTier])


def clean_price_tiers(value: t.Any) -> list[dict[str, t.Any]]:
    """Validate a list of price tiers and return it in canonical form."""
    try:
        tiers = _price_tiers_adapter.validate_python(value or [])
    except PydanticValidationError as e:
        raise DjangoValidationError([err["msg"] for err in e.errors()])
    ids = [tier.id for tier in tiers]
    if len(ids) != len(set(ids)):
        raise DjangoValidationError("Price tier identifiers must be unique within an event.")
    for tier in tiers:
        if tier.parsed_price > MAX_PRICE:
            raise DjangoValidationError(f"Price tier '{tier.name}' exceeds the maximum price of {MAX_PRICE}.")
    return [tier.model_dump(mode="json") for tier in tiers]


def clean_payment_instructions(value: t.Any) -> dict[str, str]:
    """Validate payment handles and drop the empty ones."""
    try:
        instructions = PaymentInstructions.model_validate(value or {})
    except PydanticValidationError as e:
        raise DjangoValidationError([f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors()])
    return {key: handle for key, handle in instructions.model_dump(exclude_none=True).items() if handle}


class EventQuerySet(models.QuerySet["Event"]):
    def with_artists(self) -> t.Self:
        return self.prefetch_related("artists")

    def with_details(self) -> t.Self:
        return self.select_related("user").prefetch_related("artists", "schedule_items")

    def with_active_booking_count(self) -> t.Self:
        from .booking import Booking

        return self.annotate(
            active_booking_count=Count("bookings", filter=~Q(bookings__status=Booking.Status.CANCELLED))
        )

    def owned_by(self, user: t.Any) -> t.Self:
        if isinstance(user, AnonymousUser) or not user.is_authenticated:
            return self.none()
        return self.filter(user=user)


class EventManager(models.Manager["Event"]):
    def get_queryset(self) -> EventQuerySet:
        return EventQuerySet(self.model, using=self._db)

    def with_artists(self) -> EventQuerySet:
        return self.get_queryset().with_artists()

    def with_details(self) -> EventQuerySet:
        return self.get_queryset().with_details()


class Event(ExifStripMixin, LocationMixin, TimeStampedModel):
    IMAGE_FIELDS = ("image",)

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="events")
    title = models.CharField(max_length=200, db_index=True)
    description = models.TextField(blank=True)
    date = models.DateField(db_index=True)
    time = models.TimeField(null=True, blank=True, help_text="Local time of day, no timezone stored.")
    price = models.DecimalField(
        max_digits=7,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal("0")), MaxValueValidator(MAX_PRICE)],
        help_text="Base ticket price. Empty means free.",
    )
    price_tiers = models.JSONField(default=list, blank=True)
    ticket_capacity = models.PositiveIntegerField(null=True, blank=True, help_text="Empty means unlimited.")
    payment_instructions = models.JSONField(default=dict, blank=True)
    image = models.ImageField(upload_to="event-images", null=True, blank=True, validators=image_validators)
    notes = models.TextField(max_length=2000, blank=True)
    artists = models.ManyToManyField("events.Artist", through="events.EventArtist", related_name="events", blank=True)

    objects = EventManager()
    history = HistoricalRecords()

    class Meta:
        ordering = ["date", "time"]

    def __str__(self) -> str:
        return self.title

    def clean(self) -> None:
        """Validate the JSON columns and store them in canonical form."""
        super().clean()
        errors: dict[str, list[str]] = {}
        try:
            self.price_tiers = clean_price_tiers(self.price_tiers)
        except DjangoValidationError as e:
            errors["price_tiers"] = e.messages
        try:
            self.payment_instructions = clean_payment_instructions(self.payment_instructions)
        except DjangoValidationError as e:
            errors["payment_instructions"] = e.messages
        if errors:
            raise DjangoValidationError(errors)

    @property
    def tiers(self) -> list[PriceTier]:
        return _price_tiers_adapter.validate_python(self.price_tiers or [])

    def get_tier(self, tier_id: str) -> PriceTier | None:
        return next((tier for tier in self.tiers if tier.id == tier_id), None)

    @property
    def payment_handles(self) -> PaymentInstructions:
        return PaymentInstructions.model_validate(self.payment_instructions or {})

    @property
    def starts_at(self) -> datetime:
        """The start instant, interpreting date and time in the server timezone."""
        naive = datetime.combine(self.date, self.time or time(0, 0))
        return timezone.make_aware(naive, timezone.get_default_timezone())

    def is_past(self, now: datetime | None = None) -> bool:
        return self.starts_at < (now or timezone.now())

    @property
    def base_price(self) -> Decimal:
        return self.price if self.price is not None else Decimal("0")


class EventArtist(TimeStampedModel):
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="event_artists")
    artist = models.ForeignKey("events.Artist", on_delete=models.CASCADE, related_name="event_artists")

    class Meta:
        constraints = [models.UniqueConstraint(fields=["event", "artist"], name="unique_event_artist")]

    def __str__(self) -> str:
        return f"{self.artist_id} @ {self.event_id}"
