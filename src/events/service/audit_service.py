"""Read access to the change history kept by django-simple-history."""

import typing as t
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from django.db import models
from ninja.errors import HttpError

from common.models import SiteContent
from events.models import Artist, Booking, Event

TRACKED_MODELS: dict[str, type[models.Model]] = {
    "artists": Artist,
    "events": Event,
    "bookings": Booking,
    "site-content": SiteContent,
}

ACTIONS = {"+": "created", "~": "changed", "-": "deleted"}

# Bumped on every save, so it would show up in every diff.
IGNORED_FIELDS = ["updated_at"]


@dataclass(frozen=True)
class FieldChange:
    field: str
    old: t.Any
    new: t.Any


@dataclass(frozen=True)
class HistoryEntry:
    history_id: int
    history_date: datetime
    action: str
    changed_by_id: UUID | None
    changed_by_email: str | None
    changes: list[FieldChange] = field(default_factory=list)


def object_history(model_key: str, object_id: UUID) -> list[HistoryEntry]:
    """Every recorded version of one object, newest first, each diffed against the version before it.

    Raises:
        HttpError: 404 for an untracked model or an object with no history.
    """
    model = TRACKED_MODELS.get(model_key)
    if model is None:
        raise HttpError(404, f"No history is kept for '{model_key}'.")
    records = list(model.history.filter(id=object_id).select_related("history_user"))  # type: ignore[attr-defined]
    if not records:
        raise HttpError(404, "No history found for this object.")

    entries: list[HistoryEntry] = []
    for index, record in enumerate(records):
        previous = records[index + 1] if index + 1 < len(records) else None
        changes: list[FieldChange] = []
        if previous is not None and record.history_type == "~":
            delta = record.diff_against(previous, excluded_fields=IGNORED_FIELDS)
            changes = [FieldChange(field=c.field, old=c.old, new=c.new) for c in delta.changes]
        user = record.history_user
        entries.append(
            HistoryEntry(
                history_id=record.history_id,
                history_date=record.history_date,
                action=ACTIONS[record.history_type],
                changed_by_id=user.id if user else None,
                changed_by_email=user.email if user else None,
                changes=changes,
            )
        )
    return entries
