import typing as t
from uuid import UUID

from django.db.models import QuerySet
from ninja_extra import api_controller, route, status
from ninja_jwt.authentication import JWTAuth

from common.authentication import OptionalAuth
from common.controllers import UserAwareController
from common.throttling import WriteThrottle
from events import models, schema
from events.service import discussion_service

from .permissions import CanDeleteDiscussionMessage


@api_controller("/events/{event_id}/discussions", auth=OptionalAuth(), tags=["Event Discussions"])
class EventDiscussionController(UserAwareController):
    def get_event(self, event_id: UUID) -> models.Event:
        return t.cast(models.Event, self.get_object_or_exception(models.Event, pk=event_id))

    @route.get("", url_name="list-discussions", response=list[schema.DiscussionThreadSchema])
    def list_threads(self, event_id: UUID) -> QuerySet[models.EventDiscussion]:
        """Messages oldest first, each with its replies nested underneath."""
        return discussion_service.get_threads(self.get_event(event_id))

    @route.post(
        "",
        url_name="post-discussion",
        response={201: schema.DiscussionReplySchema},
        auth=JWTAuth(),
        throttle=WriteThrottle(),
    )
    def post_message(
        self, event_id: UUID, payload: schema.DiscussionCreateSchema
    ) -> tuple[int, models.EventDiscussion]:
        """Post a message. Pass `parent_id` to reply to a top-level message."""
        message = discussion_service.post_message(self.get_event(event_id), self.user(), payload)
        return status.HTTP_201_CREATED, message

    @route.delete(
        "/{message_id}",
        url_name="delete-discussion",
        response={204: None},
        auth=JWTAuth(),
        permissions=[CanDeleteDiscussionMessage()],
        throttle=WriteThrottle(),
    )
    def delete_message(self, event_id: UUID, message_id: UUID) -> tuple[int, None]:
        """Delete a message and its replies. Allowed for the author, the event owner and admins."""
        message = t.cast(
            models.EventDiscussion,
            self.get_object_or_exception(
                models.EventDiscussion.objects.select_related("event"), pk=message_id, event_id=event_id
            ),
        )
        discussion_service.delete_message(message, deleted_by=self.user())
        return status.HTTP_204_NO_CONTENT, None
