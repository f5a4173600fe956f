"""Ticket pricing and capacity checks.

Everything in here is pure: callers pass the event, the number of seats already held and the
current instant. Nothing touches the database or the clock, so the same checks run for the
availability preview and again under lock at submission time.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from django.conf import settings

from events.exceptions import CapacityExceeded, EventPast, InvalidTicketCount, SoldOut, TierUnavailable
from events.models import Event, PriceTier


@dataclass(frozen=True)
class Quote:
    """A validated, priced booking request.

    Attributes:
        unit_price: Price of one ticket.
        total_amount: unit_price multiplied by the ticket count.
        is_free: True when the unit price is zero.
        remaining_after_booking: Seats left once this booking lands, None when unbounded.
    """

    unit_price: Decimal
    total_amount: Decimal
    is_free: bool
    remaining_after_booking: int | None
    count: int
    tier_id: str | None = None


@dataclass(frozen=True)
class TierOption:
    id: str
    name: str
    price: Decimal
    is_free: bool


@dataclass(frozen=True)
class Availability:
    """What the booking screen needs before the attendee picks anything."""

    remaining: int | None
    max_selectable: int
    is_past: bool
    is_sold_out: bool
    base_price: Decimal
    tiers: tuple[TierOption, ...]


def remaining_capacity(event: Event, existing_bookings: int) -> int | None:
    """Seats left, or None when the event has no capacity limit."""
    if event.ticket_capacity is None:
        return None
    return event.ticket_capacity - existing_bookings


def max_selectable(remaining: int | None) -> int:
    """Upper bound for the ticket-count picker."""
    ceiling = settings.MAX_TICKETS_PER_BOOKING
    if remaining is None:
        return ceiling
    return max(0, min(ceiling, remaining))


def clamp_ticket_count(count: int, remaining: int | None) -> int:
    """Clamp a requested count into ``[1, max_selectable]`` for display purposes."""
    return max(1, min(count, max_selectable(remaining) or 1))


def resolve_unit_price(event: Event, tier_id: str | None, now: datetime) -> Decimal:
    """Price of a single ticket.

    An explicitly selected tier must exist and be on sale; the base price is never used as a
    silent fallback for it.
    """
    if tier_id:
        tier: PriceTier | None = event.get_tier(tier_id)
        if tier is None:
            raise TierUnavailable("The selected price tier does not exist.")
        if tier.is_expired(now):
            raise TierUnavailable(f"The '{tier.name}' price is no longer available.")
        if not tier.has_started(now):
            raise TierUnavailable(f"The '{tier.name}' price is not on sale yet.")
        return tier.parsed_price
    return event.base_price


def evaluate(
    event: Event,
    *,
    count: int,
    existing_bookings: int,
    now: datetime,
    tier_id: str | None = None,
) -> Quote:
    """Price a request for ``count`` tickets and check it against capacity and time.

    Checks run in a fixed order: sold out, capacity, past event, count, tier.

    Raises:
        SoldOut: A capacity is set and no seats are left.
        CapacityExceeded: More tickets were requested than remain.
        EventPast: The event has already started.
        InvalidTicketCount: Fewer than one ticket, or more than the per-booking limit, was requested.
        TierUnavailable: The selected tier is unknown, expired or not on sale yet.
    """
    remaining = remaining_capacity(event, existing_bookings)
    if remaining is not None and remaining <= 0:
        raise SoldOut()
    if remaining is not None and count > remaining:
        raise CapacityExceeded(remaining=remaining, requested=count)
    if event.starts_at < now:
        raise EventPast()
    if count < 1:
        raise InvalidTicketCount()
    if count > settings.MAX_TICKETS_PER_BOOKING:
        raise InvalidTicketCount(f"At most {settings.MAX_TICKETS_PER_BOOKING} tickets can be booked at once.")

    unit_price = resolve_unit_price(event, tier_id, now)
    return Quote(
        unit_price=unit_price,
        total_amount=unit_price * count,
        is_free=unit_price == 0,
        remaining_after_booking=None if remaining is None else remaining - count,
        count=count,
        tier_id=tier_id or None,
    )


def availability(event: Event, *, existing_bookings: int, now: datetime) -> Availability:
    remaining = remaining_capacity(event, existing_bookings)
    return Availability(
        remaining=remaining,
        max_selectable=max_selectable(remaining),
        is_past=event.starts_at < now,
        is_sold_out=remaining is not None and remaining <= 0,
        base_price=event.base_price,
        tiers=tuple(
            TierOption(id=tier.id, name=tier.name, price=tier.parsed_price, is_free=tier.parsed_price == 0)
            for tier in event.tiers
            if tier.is_selectable(now)
        ),
    )
