import typing as t
from datetime import datetime
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from ninja.errors import HttpError

from accounts.models import EncoreUser
from accounts.service import roles as roles_service
from events.models import Artist, Booking, Event, EventArtist, EventScheduleItem
from events.models.event import clean_payment_instructions, clean_price_tiers
from events.schema import (
    EventCreateSchema,
    EventEditSchema,
    EventFilterSchema,
    ScheduleItemCreateSchema,
    ScheduleItemEditSchema,
)
from events.service import pricing, update_db_instance
from events.service.event_filters import filter_and_sort

logger = structlog.get_logger(__name__)

# Fields that are not plain model columns and are handled separately.
_NON_MODEL_FIELDS = {"artist_ids"}
_NULLABLE_FIELDS = {"time", "price", "ticket_capacity", "location_lat", "location_lng"}
_JSON_FIELDS: dict[str, t.Callable[[t.Any], t.Any]] = {
    "price_tiers": clean_price_tiers,
    "payment_instructions": clean_payment_instructions,
}


def list_events(filters: EventFilterSchema, now: datetime | None = None) -> list[Event]:
    """The public catalogue, filtered and sorted in memory."""
    events = Event.objects.with_artists().all()
    return filter_and_sort(
        events,
        now=now or timezone.now(),
        date_filter=filters.date_filter,
        location=filters.location,
        sort=filters.sort,
        date_from=filters.date_from,
        date_to=filters.date_to,
    )


def get_availability(event: Event) -> pricing.Availability:
    return pricing.availability(event, existing_bookings=Booking.objects.active_count(event), now=timezone.now())


def _resolve_artists(artist_ids: list[UUID]) -> list[Artist]:
    unique_ids = list(dict.fromkeys(artist_ids))
    artists = list(Artist.objects.filter(pk__in=unique_ids))
    if len(artists) != len(unique_ids):
        found = {a.pk for a in artists}
        missing = [str(pk) for pk in unique_ids if pk not in found]
        raise HttpError(400, str(_("Unknown artist(s): {ids}")).format(ids=", ".join(missing)))
    return artists


def set_artists(event: Event, artist_ids: list[UUID]) -> None:
    """Replace the event's line-up with exactly the given artists."""
    artists = _resolve_artists(artist_ids)
    EventArtist.objects.filter(event=event).exclude(artist__in=artists).delete()
    existing = set(EventArtist.objects.filter(event=event).values_list("artist_id", flat=True))
    EventArtist.objects.bulk_create(
        [EventArtist(event=event, artist=artist) for artist in artists if artist.pk not in existing]
    )


def _model_data(payload: EventEditSchema, *, exclude_unset: bool) -> dict[str, t.Any]:
    data = payload.model_dump(exclude_unset=exclude_unset, exclude=_NON_MODEL_FIELDS)
    data = {key: value for key, value in data.items() if value is not None or key in _NULLABLE_FIELDS}
    errors: dict[str, list[str]] = {}
    for field, clean in _JSON_FIELDS.items():
        if field not in data:
            continue
        try:
            data[field] = clean(data[field])
        except ValidationError as e:
            errors[field] = e.messages
    if errors:
        raise ValidationError(errors)
    return data


@transaction.atomic
def create_event(user: EncoreUser, payload: EventCreateSchema) -> Event:
    """Create an event owned by ``user`` and attach its artists."""
    data = _model_data(payload, exclude_unset=False)
    event = Event.objects.create(user=user, **data)
    if payload.artist_ids:
        set_artists(event, payload.artist_ids)
    logger.info("event_created", event_id=str(event.id), user_id=str(user.id))
    return event


@transaction.atomic
def update_event(event: Event, payload: EventEditSchema) -> Event:
    """Apply a partial update. Only fields present in the payload change."""
    data = _model_data(payload, exclude_unset=True)
    event = update_db_instance(event, **data)
    if payload.artist_ids is not None:
        set_artists(event, payload.artist_ids)
    logger.info("event_updated", event_id=str(event.id), fields=sorted(payload.model_fields_set))
    return event


def delete_event(event: Event, *, deleted_by: EncoreUser) -> None:
    event_id = str(event.id)
    event.delete()
    logger.info("event_deleted", event_id=event_id, deleted_by=str(deleted_by.id))


@transaction.atomic
def transfer_ownership(event: Event, email: str, *, actor: EncoreUser) -> Event:
    """Hand the event over to another user who is allowed to run events.

    Raises:
        HttpError: 404 if no user has that email, 400 if they cannot own events.
    """
    target = EncoreUser.objects.filter(email__iexact=email.strip()).first()
    if target is None:
        raise HttpError(404, str(_("No user with this email address.")))
    if not roles_service.can_create_events(target):
        raise HttpError(400, str(_("The new owner must be an artist, organizer or admin.")))
    previous_owner = event.user_id
    event = update_db_instance(event, user=target)
    logger.info(
        "event_ownership_transferred",
        event_id=str(event.id),
        from_user=str(previous_owner),
        to_user=str(target.id),
        actor_id=str(actor.id),
    )
    return event


def get_schedule(event: Event) -> QuerySet[EventScheduleItem]:
    return EventScheduleItem.objects.filter(event=event).order_by("time", "created_at")


def add_schedule_item(event: Event, payload: ScheduleItemCreateSchema) -> EventScheduleItem:
    return EventScheduleItem.objects.create(event=event, **payload.model_dump())


def update_schedule_item(item: EventScheduleItem, payload: ScheduleItemEditSchema) -> EventScheduleItem:
    data = {key: value for key, value in payload.model_dump(exclude_unset=True).items() if value is not None}
    return update_db_instance(item, **data)
