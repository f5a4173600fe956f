"""In-memory filtering and sorting of the event catalogue."""

import typing as t
from datetime import date, datetime, timedelta
from decimal import Decimal

from django.utils import timezone

if t.TYPE_CHECKING:
    from events.models import Event

DateFilter = t.Literal["all", "upcoming", "past", "this-week", "this-month"]
SortOption = t.Literal["date-asc", "date-desc", "price-asc", "price-desc", "name-asc"]

DATE_FILTERS: tuple[str, ...] = t.get_args(DateFilter)
SORT_OPTIONS: tuple[str, ...] = t.get_args(SortOption)


def _price(event: "Event") -> Decimal:
    return event.price if event.price is not None else Decimal("0")


def _week_bounds(today: date) -> tuple[date, date]:
    monday = today - timedelta(days=today.weekday())
    return monday, monday + timedelta(days=6)


def _month_bounds(today: date) -> tuple[date, date]:
    first = today.replace(day=1)
    next_month = (first + timedelta(days=32)).replace(day=1)
    return first, next_month - timedelta(days=1)


def _matches_date_filter(event: "Event", date_filter: str, now: datetime, today: date) -> bool:
    match date_filter:
        case "upcoming":
            return event.starts_at >= now
        case "past":
            return event.starts_at < now
        case "this-week":
            start, end = _week_bounds(today)
            return start <= event.date <= end
        case "this-month":
            start, end = _month_bounds(today)
            return start <= event.date <= end
        case _:
            return True


def _sort_key(sort: str) -> tuple[t.Callable[["Event"], t.Any], bool]:
    match sort:
        case "date-desc":
            return (lambda e: e.starts_at), True
        case "price-asc":
            return _price, False
        case "price-desc":
            return _price, True
        case "name-asc":
            return (lambda e: e.title.casefold()), False
        case _:
            return (lambda e: e.starts_at), False


def filter_and_sort(
    events: t.Iterable["Event"],
    *,
    now: datetime,
    date_filter: str = "all",
    location: str = "",
    sort: str = "date-asc",
    date_from: date | None = None,
    date_to: date | None = None,
) -> list["Event"]:
    """Filter and order events without touching the database.

    Args:
        events: Any iterable of events, e.g. a queryset already evaluated by the caller.
        now: The reference instant for "upcoming", "past", "this-week" and "this-month".
        date_filter: One of DATE_FILTERS. Unknown values behave like "all".
        location: Case-insensitive substring of the location name. Blank means no filter.
        sort: One of SORT_OPTIONS. Unknown values behave like "date-asc".
        date_from: Inclusive lower bound on the event date.
        date_to: Inclusive upper bound on the event date.

    Returns:
        A new list. Sorting is stable, so ties keep their incoming order.
    """
    today = timezone.localtime(now).date() if timezone.is_aware(now) else now.date()
    needle = (location or "").strip().casefold()

    selected = [
        event
        for event in events
        if _matches_date_filter(event, date_filter, now, today)
        and (date_from is None or event.date >= date_from)
        and (date_to is None or event.date <= date_to)
        and (not needle or needle in (event.location_name or "").casefold())
    ]
    key, reverse = _sort_key(sort)
    return sorted(selected, key=key, reverse=reverse)
