import structlog
from django.db.models import QuerySet
from django.utils.translation import gettext_lazy as _
from ninja.errors import HttpError

from accounts.models import EncoreUser
from events.models import Event, EventDiscussion
from events.schema import DiscussionCreateSchema

logger = structlog.get_logger(__name__)


def get_threads(event: Event) -> QuerySet[EventDiscussion]:
    """Top-level messages, oldest first, each carrying its replies."""
    return EventDiscussion.objects.threads(event)


def post_message(event: Event, user: EncoreUser, payload: DiscussionCreateSchema) -> EventDiscussion:
    """Post a message, or a reply when ``parent_id`` is given.

    Raises:
        HttpError: 404 if the parent message is not part of this event.
    """
    parent = None
    if payload.parent_id is not None:
        parent = EventDiscussion.objects.filter(pk=payload.parent_id, event=event).first()
        if parent is None:
            raise HttpError(404, str(_("The message you are replying to does not exist.")))
    message = EventDiscussion.objects.create(event=event, user=user, message=payload.message, parent=parent)
    logger.info(
        "discussion_message_posted",
        event_id=str(event.id),
        message_id=str(message.id),
        is_reply=parent is not None,
    )
    return message


def delete_message(message: EventDiscussion, *, deleted_by: EncoreUser) -> None:
    message_id = str(message.id)
    message.delete()
    logger.info("discussion_message_deleted", message_id=message_id, deleted_by=str(deleted_by.id))
