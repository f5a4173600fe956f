"""Booking schemas."""

import datetime
import typing as t
from decimal import Decimal
from uuid import UUID

from ninja import Schema
from pydantic import Field

from events.models import Booking

from .event import MinimalEventSchema


class BookingSchema(Schema):
    id: UUID
    event_id: UUID
    user_id: UUID
    attendee_name: str
    attendee_email: str
    amount: Decimal
    payment_method: Booking.PaymentMethod
    status: Booking.Status
    has_proof_of_payment: bool
    created_at: datetime.datetime

    @staticmethod
    def resolve_has_proof_of_payment(obj: Booking) -> bool:
        return bool(obj.proof_of_payment)


class OrganizerBookingSchema(BookingSchema):
    proof_of_payment_url: str | None = None

    @staticmethod
    def resolve_proof_of_payment_url(obj: Booking) -> str | None:
        return obj.proof_of_payment.url if obj.proof_of_payment else None


class MyBookingSchema(BookingSchema):
    event: MinimalEventSchema


class BookingSubmitSchema(Schema):
    count: int = Field(1, description="Number of tickets. One booking row is created per ticket.")
    tier_id: str | None = Field(None, description="Optional price tier identifier.")


class QuoteSchema(Schema):
    unit_price: Decimal
    total_amount: Decimal
    is_free: bool
    remaining_after_booking: int | None = None
    count: int
    tier_id: str | None = None


class BookingConfirmationSchema(Schema):
    bookings: list[BookingSchema]
    quote: QuoteSchema
    calendar_link: str
    message: str


class BookingStatusUpdateSchema(Schema):
    status: t.Literal["confirmed", "cancelled"]


class EventBookingsSchema(Schema):
    bookings: list[OrganizerBookingSchema]
    remaining_capacity: int | None = None
    active_count: int
