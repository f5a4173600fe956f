"""Tests for the pure pricing and capacity evaluator."""

import typing as t
from datetime import date, datetime, time
from datetime import timezone as dt_timezone
from decimal import Decimal

import pytest

from events.exceptions import CapacityExceeded, EventPast, InvalidTicketCount, SoldOut, TierUnavailable
from events.models import Event
from events.service import pricing

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=dt_timezone.utc)


def _event(**kwargs: object) -> Event:
    defaults: dict[str, object] = {"title": "Recital", "date": date(2026, 3, 10), "time": time(19, 30)}
    defaults.update(kwargs)
    return Event(**defaults)


class TestEvaluate:
    def test_free_event_without_capacity(self) -> None:
        quote = pricing.evaluate(_event(), count=3, existing_bookings=100, now=NOW)

        assert quote.unit_price == Decimal("0")
        assert quote.total_amount == Decimal("0")
        assert quote.is_free is True
        assert quote.remaining_after_booking is None
        assert quote.count == 3

    def test_paid_event_multiplies_base_price(self) -> None:
        quote = pricing.evaluate(
            _event(price=Decimal("25.00"), ticket_capacity=10), count=4, existing_bookings=2, now=NOW
        )

        assert quote.unit_price == Decimal("25.00")
        assert quote.total_amount == Decimal("100.00")
        assert quote.is_free is False
        assert quote.remaining_after_booking == 4

    def test_exact_remaining_capacity_is_accepted(self) -> None:
        quote = pricing.evaluate(_event(ticket_capacity=5), count=2, existing_bookings=3, now=NOW)

        assert quote.remaining_after_booking == 0

    def test_sold_out(self) -> None:
        with pytest.raises(SoldOut):
            pricing.evaluate(_event(ticket_capacity=5), count=1, existing_bookings=5, now=NOW)

    def test_oversold_event_is_sold_out(self) -> None:
        with pytest.raises(SoldOut):
            pricing.evaluate(_event(ticket_capacity=5), count=1, existing_bookings=7, now=NOW)

    def test_capacity_exceeded_reports_numbers(self) -> None:
        with pytest.raises(CapacityExceeded) as exc_info:
            pricing.evaluate(_event(ticket_capacity=5), count=3, existing_bookings=4, now=NOW)

        assert exc_info.value.remaining == 1
        assert exc_info.value.requested == 3
        assert exc_info.value.message == "Only 1 ticket left, 3 requested."

    def test_past_event(self) -> None:
        with pytest.raises(EventPast):
            pricing.evaluate(_event(date=date(2026, 2, 1)), count=1, existing_bookings=0, now=NOW)

    def test_event_without_time_starts_at_midnight(self) -> None:
        with pytest.raises(EventPast):
            pricing.evaluate(_event(date=date(2026, 3, 1), time=None), count=1, existing_bookings=0, now=NOW)

    @pytest.mark.parametrize("count", [0, -2])
    def test_invalid_ticket_count(self, count: int) -> None:
        with pytest.raises(InvalidTicketCount):
            pricing.evaluate(_event(), count=count, existing_bookings=0, now=NOW)

    def test_per_booking_limit_is_enforced(self, settings: t.Any) -> None:
        settings.MAX_TICKETS_PER_BOOKING = 10

        assert pricing.evaluate(_event(), count=10, existing_bookings=0, now=NOW).count == 10
        with pytest.raises(InvalidTicketCount, match="At most 10 tickets"):
            pricing.evaluate(_event(), count=11, existing_bookings=0, now=NOW)

    def test_sold_out_is_checked_before_past(self) -> None:
        event = _event(date=date(2026, 2, 1), ticket_capacity=1)
        with pytest.raises(SoldOut):
            pricing.evaluate(event, count=1, existing_bookings=1, now=NOW)

    def test_capacity_is_checked_before_count(self) -> None:
        with pytest.raises(CapacityExceeded):
            pricing.evaluate(_event(ticket_capacity=2), count=5, existing_bookings=0, now=NOW)


class TestTiers:
    tiers = [
        {"id": "student", "name": "Student", "price": "10"},
        {"id": "early", "name": "Early bird", "price": "15", "end_date": "2026-02-01T00:00:00Z"},
        {"id": "late", "name": "Door", "price": "30", "start_date": "2026-03-05T00:00:00Z"},
        {"id": "broken", "name": "Mystery", "price": "ten dollars"},
    ]

    def test_tier_price_overrides_base_price(self) -> None:
        event = _event(price=Decimal("25"), price_tiers=self.tiers)

        quote = pricing.evaluate(event, count=2, existing_bookings=0, now=NOW, tier_id="student")

        assert quote.unit_price == Decimal("10")
        assert quote.total_amount == Decimal("20")
        assert quote.tier_id == "student"

    def test_unknown_tier(self) -> None:
        event = _event(price=Decimal("25"), price_tiers=self.tiers)
        with pytest.raises(TierUnavailable):
            pricing.evaluate(event, count=1, existing_bookings=0, now=NOW, tier_id="vip")

    def test_expired_tier(self) -> None:
        event = _event(price=Decimal("25"), price_tiers=self.tiers)
        with pytest.raises(TierUnavailable, match="no longer available"):
            pricing.evaluate(event, count=1, existing_bookings=0, now=NOW, tier_id="early")

    def test_tier_not_on_sale_yet(self) -> None:
        event = _event(price=Decimal("25"), price_tiers=self.tiers)
        with pytest.raises(TierUnavailable, match="not on sale yet"):
            pricing.evaluate(event, count=1, existing_bookings=0, now=NOW, tier_id="late")

    def test_unparseable_tier_price_is_free(self) -> None:
        event = _event(price=Decimal("25"), price_tiers=self.tiers)

        quote = pricing.evaluate(event, count=1, existing_bookings=0, now=NOW, tier_id="broken")

        assert quote.unit_price == Decimal("0")
        assert quote.is_free is True

    @pytest.mark.parametrize(("price", "expected", "is_free"), [("0.001", "0.00", True), ("9.999", "10.00", False)])
    def test_tier_price_is_rounded_to_cents(self, price: str, expected: str, is_free: bool) -> None:
        event = _event(price_tiers=[{"id": "odd", "name": "Odd", "price": price}])

        quote = pricing.evaluate(event, count=1, existing_bookings=0, now=NOW, tier_id="odd")

        assert quote.unit_price == Decimal(expected)
        assert quote.is_free is is_free

    def test_empty_tier_id_uses_base_price(self) -> None:
        event = _event(price=Decimal("25"), price_tiers=self.tiers)

        quote = pricing.evaluate(event, count=1, existing_bookings=0, now=NOW, tier_id="")

        assert quote.unit_price == Decimal("25")
        assert quote.tier_id is None


class TestSelectionBounds:
    def test_max_selectable_unbounded(self) -> None:
        assert pricing.max_selectable(None) == 10

    @pytest.mark.parametrize(("remaining", "expected"), [(3, 3), (10, 10), (50, 10), (0, 0), (-4, 0)])
    def test_max_selectable_bounded(self, remaining: int, expected: int) -> None:
        assert pricing.max_selectable(remaining) == expected

    @pytest.mark.parametrize(
        ("count", "remaining", "expected"),
        [(5, 3, 3), (0, None, 1), (12, None, 10), (2, 0, 1)],
    )
    def test_clamp_ticket_count(self, count: int, remaining: int | None, expected: int) -> None:
        assert pricing.clamp_ticket_count(count, remaining) == expected


class TestAvailability:
    def test_availability_lists_only_selectable_tiers(self) -> None:
        event = _event(price=Decimal("25"), ticket_capacity=8, price_tiers=TestTiers.tiers)

        result = pricing.availability(event, existing_bookings=6, now=NOW)

        assert result.remaining == 2
        assert result.max_selectable == 2
        assert result.is_past is False
        assert result.is_sold_out is False
        assert result.base_price == Decimal("25")
        assert [tier.id for tier in result.tiers] == ["student", "broken"]
        assert result.tiers[1].is_free is True

    def test_availability_sold_out_and_past(self) -> None:
        event = _event(date=date(2026, 2, 1), ticket_capacity=2)

        result = pricing.availability(event, existing_bookings=2, now=NOW)

        assert result.is_sold_out is True
        assert result.is_past is True
        assert result.max_selectable == 0
