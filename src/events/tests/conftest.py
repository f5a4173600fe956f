import typing as t
from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from accounts.models import EncoreUser, UserRole
from events.models import Artist, Booking, Event


@pytest.fixture
def artist_user(user_factory: t.Any) -> EncoreUser:
    return user_factory(username="artist@user.test", roles=[UserRole.Role.ARTIST])


@pytest.fixture
def artist(artist_user: EncoreUser) -> Artist:
    return Artist.objects.create(user=artist_user, name="Clara Quartet", genre="Chamber", bio="String quartet.")


@pytest.fixture
def event(organizer: EncoreUser, next_week: datetime) -> Event:
    """A free event next week with no capacity limit."""
    return Event.objects.create(
        user=organizer,
        title="Brahms by Candlelight",
        date=next_week.date(),
        time=next_week.time(),
        location_name="St. Martin's Hall, Vienna",
    )


@pytest.fixture
def paid_event(organizer: EncoreUser, next_week: datetime) -> Event:
    return Event.objects.create(
        user=organizer,
        title="Schubert Winterreise",
        date=(next_week + timedelta(days=1)).date(),
        time=next_week.time(),
        price=Decimal("25.00"),
        ticket_capacity=10,
        location_name="Konzerthaus, Berlin",
        payment_instructions={"venmo": "@encore-concerts"},
        price_tiers=[
            {"id": "student", "name": "Student", "price": "10"},
            {"id": "early", "name": "Early bird", "price": "15", "end_date": "2000-01-01T00:00:00Z"},
        ],
    )


@pytest.fixture
def past_event(organizer: EncoreUser, next_week: datetime) -> Event:
    return Event.objects.create(
        user=organizer,
        title="Last Year's Gala",
        date=(next_week - timedelta(days=30)).date(),
        time=next_week.time(),
    )


@pytest.fixture
def proof_file() -> SimpleUploadedFile:
    return SimpleUploadedFile("receipt.png", b"\x89PNG\r\n\x1a\nproof", content_type="image/png")


@pytest.fixture
def make_bookings() -> t.Callable[..., list[Booking]]:
    """Insert `count` booking rows for a user, the way a checkout does."""

    def _make(event: Event, user: EncoreUser, count: int, status: str = Booking.Status.CONFIRMED) -> list[Booking]:
        method = Booking.PaymentMethod.FREE if event.base_price == 0 else Booking.PaymentMethod.DIRECT
        return Booking.objects.bulk_create(
            [
                Booking(
                    event=event,
                    user=user,
                    attendee_name=user.preferred_name or user.get_full_name(),
                    attendee_email=user.email,
                    amount=event.base_price,
                    payment_method=method,
                    status=status,
                )
                for _ in range(count)
            ]
        )

    return _make
