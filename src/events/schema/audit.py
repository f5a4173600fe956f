import datetime
import typing as t
from uuid import UUID

from ninja import Schema


class FieldChangeSchema(Schema):
    field: str
    old: t.Any = None
    new: t.Any = None


class HistoryEntrySchema(Schema):
    history_id: int
    history_date: datetime.datetime
    action: t.Literal["created", "changed", "deleted"]
    changed_by_id: UUID | None = None
    changed_by_email: str | None = None
    changes: list[FieldChangeSchema] = []
