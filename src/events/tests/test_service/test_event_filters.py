import typing as t
from datetime import date, datetime, time
from datetime import timezone as dt_timezone
from decimal import Decimal

import pytest

from events.models import Event
from events.service.event_filters import DATE_FILTERS, SORT_OPTIONS, filter_and_sort

# Wednesday; the week runs from Monday 2 March to Sunday 8 March.
NOW = datetime(2026, 3, 4, 12, 0, tzinfo=dt_timezone.utc)


def _event(title: str, day: date, *, at: time | None = time(19, 0), price: str | None = None, where: str = "") -> Event:
    return Event(
        title=title,
        date=day,
        time=at,
        price=Decimal(price) if price is not None else None,
        location_name=where,
    )


@pytest.fixture
def catalogue() -> list[Event]:
    return [
        _event("Mozart Requiem", date(2026, 3, 6), price="40", where="Stephansdom, Vienna"),
        _event("Bach Cello Suites", date(2026, 2, 20), price="15", where="Thomaskirche, Leipzig"),
        _event("Chopin Nocturnes", date(2026, 3, 4), at=time(9, 0), where="Salle Pleyel, Paris"),
        _event("Arvo Pärt Evening", date(2026, 3, 25), price="20", where="Musikverein, VIENNA"),
        _event("Beethoven Nine", date(2026, 4, 2), price="60", where="Philharmonie, Berlin"),
    ]


def _titles(events: list[Event]) -> list[str]:
    return [event.title for event in events]


def test_defaults_return_everything_by_start() -> None:
    events = [
        _event("Later", date(2026, 3, 10)),
        _event("Earlier", date(2026, 3, 10), at=time(11, 0)),
        _event("Untimed", date(2026, 3, 10), at=None),
    ]

    assert _titles(filter_and_sort(events, now=NOW)) == ["Untimed", "Earlier", "Later"]


def test_upcoming_uses_start_instant(catalogue: list[Event]) -> None:
    result = filter_and_sort(catalogue, now=NOW, date_filter="upcoming")

    # Chopin started at 09:00 today, so it is no longer upcoming.
    assert _titles(result) == ["Mozart Requiem", "Arvo Pärt Evening", "Beethoven Nine"]


def test_past(catalogue: list[Event]) -> None:
    result = filter_and_sort(catalogue, now=NOW, date_filter="past")

    assert _titles(result) == ["Bach Cello Suites", "Chopin Nocturnes"]


def test_this_week_includes_earlier_days_of_the_week(catalogue: list[Event]) -> None:
    result = filter_and_sort(catalogue, now=NOW, date_filter="this-week")

    assert _titles(result) == ["Chopin Nocturnes", "Mozart Requiem"]


def test_this_month(catalogue: list[Event]) -> None:
    result = filter_and_sort(catalogue, now=NOW, date_filter="this-month")

    assert _titles(result) == ["Chopin Nocturnes", "Mozart Requiem", "Arvo Pärt Evening"]


def test_week_boundaries_are_inclusive() -> None:
    events = [
        _event("Monday", date(2026, 3, 2)),
        _event("Sunday", date(2026, 3, 8)),
        _event("Next Monday", date(2026, 3, 9)),
        _event("Previous Sunday", date(2026, 3, 1)),
    ]

    assert _titles(filter_and_sort(events, now=NOW, date_filter="this-week")) == ["Monday", "Sunday"]


def test_location_is_case_insensitive_substring(catalogue: list[Event]) -> None:
    result = filter_and_sort(catalogue, now=NOW, location="  vienna ")

    assert _titles(result) == ["Mozart Requiem", "Arvo Pärt Evening"]


def test_blank_location_matches_events_without_location() -> None:
    events = [_event("Nowhere", date(2026, 3, 10))]

    assert _titles(filter_and_sort(events, now=NOW, location="   ")) == ["Nowhere"]
    assert filter_and_sort(events, now=NOW, location="Paris") == []


def test_explicit_date_range_is_inclusive(catalogue: list[Event]) -> None:
    result = filter_and_sort(catalogue, now=NOW, date_from=date(2026, 3, 4), date_to=date(2026, 3, 25))

    assert _titles(result) == ["Chopin Nocturnes", "Mozart Requiem", "Arvo Pärt Evening"]


def test_filters_combine(catalogue: list[Event]) -> None:
    result = filter_and_sort(catalogue, now=NOW, date_filter="upcoming", location="vienna", sort="date-desc")

    assert _titles(result) == ["Arvo Pärt Evening", "Mozart Requiem"]


def test_sort_by_price_treats_free_as_zero(catalogue: list[Event]) -> None:
    ascending = filter_and_sort(catalogue, now=NOW, sort="price-asc")
    descending = filter_and_sort(catalogue, now=NOW, sort="price-desc")

    assert _titles(ascending) == [
        "Chopin Nocturnes",
        "Bach Cello Suites",
        "Arvo Pärt Evening",
        "Mozart Requiem",
        "Beethoven Nine",
    ]
    assert _titles(descending) == list(reversed(_titles(ascending)))


def test_sort_by_name(catalogue: list[Event]) -> None:
    result = filter_and_sort(catalogue, now=NOW, sort="name-asc")

    assert _titles(result) == [
        "Arvo Pärt Evening",
        "Bach Cello Suites",
        "Beethoven Nine",
        "Chopin Nocturnes",
        "Mozart Requiem",
    ]


def test_sort_is_stable_for_ties() -> None:
    events = [
        _event("First", date(2026, 3, 10), price="10"),
        _event("Second", date(2026, 3, 11), price="10"),
        _event("Third", date(2026, 3, 12), price="10"),
    ]

    assert _titles(filter_and_sort(events, now=NOW, sort="price-asc")) == ["First", "Second", "Third"]
    assert _titles(filter_and_sort(events, now=NOW, sort="price-desc")) == ["First", "Second", "Third"]


def test_unknown_options_fall_back_to_defaults(catalogue: list[Event]) -> None:
    result = filter_and_sort(catalogue, now=NOW, date_filter="someday", sort="random")

    assert _titles(result) == _titles(filter_and_sort(catalogue, now=NOW))
    assert len(result) == len(catalogue)


def test_input_is_not_mutated(catalogue: list[Event]) -> None:
    original = list(catalogue)

    filter_and_sort(catalogue, now=NOW, sort="name-asc", date_filter="upcoming")

    assert catalogue == original


def test_known_options() -> None:
    assert DATE_FILTERS == ("all", "upcoming", "past", "this-week", "this-month")
    assert SORT_OPTIONS == ("date-asc", "date-desc", "price-asc", "price-desc", "name-asc")


@pytest.mark.parametrize("sort", SORT_OPTIONS)
@pytest.mark.parametrize("date_filter", DATE_FILTERS)
@pytest.mark.parametrize("location", ["", "vienna"])
def test_applying_twice_changes_nothing(catalogue: list[Event], date_filter: str, sort: str, location: str) -> None:
    options: dict[str, t.Any] = {"now": NOW, "date_filter": date_filter, "sort": sort, "location": location}

    once = filter_and_sort(catalogue, **options)
    twice = filter_and_sort(once, **options)

    assert len(twice) == len(once)
    assert all(a is b for a, b in zip(once, twice))
