"""Event-related schemas."""

import datetime
import typing as t
from decimal import Decimal
from uuid import UUID

from ninja import Schema
from pydantic import Field

from accounts.schema import MinimalEncoreUserSchema
from common.schema import EmailAddress, OneToTwoHundredString, StrippedString, UpToTwoThousandString
from events.models import Event, PaymentInstructions, PriceTier

from .artist import MinimalArtistSchema
from .mixins import LocationEditMixin, LocationRetrieveMixin, ensure_url
from .schedule import ScheduleItemSchema

Price = t.Annotated[Decimal, Field(ge=0, le=10000, max_digits=7, decimal_places=2)]


class EventEditSchema(LocationEditMixin):
    title: OneToTwoHundredString | None = None
    description: StrippedString | None = None
    date: datetime.date | None = None
    time: datetime.time | None = None
    price: Price | None = Field(None, description="Base ticket price. Null means free.")
    price_tiers: list[PriceTier] | None = None
    ticket_capacity: int | None = Field(None, ge=0, description="Null means unlimited.")
    payment_instructions: PaymentInstructions | None = None
    notes: UpToTwoThousandString | None = None
    artist_ids: list[UUID] | None = None


class EventCreateSchema(EventEditSchema):
    title: OneToTwoHundredString
    date: datetime.date


class TransferOwnershipSchema(Schema):
    email: EmailAddress


class EventInListSchema(LocationRetrieveMixin):
    id: UUID
    title: str
    date: datetime.date
    time: datetime.time | None = None
    price: Decimal | None = None
    ticket_capacity: int | None = None
    image_url: str | None = None
    artists: list[MinimalArtistSchema]

    @staticmethod
    def resolve_image_url(obj: Event) -> str | None:
        return ensure_url(obj.image.url) if obj.image else None

    @staticmethod
    def resolve_artists(obj: Event) -> list[t.Any]:
        return list(obj.artists.all())


class EventDetailSchema(EventInListSchema):
    description: str
    notes: str
    price_tiers: list[PriceTier]
    payment_instructions: PaymentInstructions
    owner: MinimalEncoreUserSchema
    schedule: list[ScheduleItemSchema]

    @staticmethod
    def resolve_price_tiers(obj: Event) -> list[PriceTier]:
        return obj.tiers

    @staticmethod
    def resolve_payment_instructions(obj: Event) -> PaymentInstructions:
        return obj.payment_handles

    @staticmethod
    def resolve_owner(obj: Event) -> t.Any:
        return obj.user

    @staticmethod
    def resolve_schedule(obj: Event) -> list[t.Any]:
        return list(obj.schedule_items.all())


class MinimalEventSchema(Schema):
    id: UUID
    title: str
    date: datetime.date
    time: datetime.time | None = None
    location_name: str


class TierOptionSchema(Schema):
    id: str
    name: str
    price: Decimal
    is_free: bool


class AvailabilitySchema(Schema):
    remaining: int | None = Field(None, description="Seats left. Null means unlimited.")
    max_selectable: int
    is_past: bool
    is_sold_out: bool
    base_price: Decimal
    tiers: list[TierOptionSchema]


class EventFilterSchema(Schema):
    date_filter: t.Literal["all", "upcoming", "past", "this-week", "this-month"] = "all"
    location: str = ""
    sort: t.Literal["date-asc", "date-desc", "price-asc", "price-desc", "name-asc"] = "date-asc"
    date_from: datetime.date | None = None
    date_to: datetime.date | None = None
