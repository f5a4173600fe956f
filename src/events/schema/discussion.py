import datetime
import typing as t
from uuid import UUID

from ninja import Schema
from pydantic import StringConstraints

from accounts.schema import MinimalEncoreUserSchema
from events.models import EventDiscussion

DiscussionMessage = t.Annotated[str, StringConstraints(min_length=1, max_length=2000, strip_whitespace=True)]


class DiscussionCreateSchema(Schema):
    message: DiscussionMessage
    parent_id: UUID | None = None


class DiscussionReplySchema(Schema):
    id: UUID
    user: MinimalEncoreUserSchema
    message: str
    parent_id: UUID | None = None
    created_at: datetime.datetime


class DiscussionThreadSchema(DiscussionReplySchema):
    replies: list[DiscussionReplySchema]

    @staticmethod
    def resolve_replies(obj: EventDiscussion) -> list[EventDiscussion]:
        return list(obj.replies.all())
