import typing as t

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

from common.models import TimeStampedModel

from .event import Event


class EventDiscussionQuerySet(models.QuerySet["EventDiscussion"]):
    def threads(self, event: Event) -> t.Self:
        """Top-level messages of an event with their replies prefetched."""
        return (
            self.filter(event=event, parent__isnull=True)
            .select_related("user")
            .prefetch_related(
                models.Prefetch(
                    "replies",
                    queryset=EventDiscussion.objects.select_related("user").order_by("created_at"),
                )
            )
            .order_by("created_at")
        )


class EventDiscussion(TimeStampedModel):
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="discussions")
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="discussion_messages")
    message = models.TextField(max_length=2000)
    parent = models.ForeignKey("self", on_delete=models.CASCADE, null=True, blank=True, related_name="replies")

    objects = EventDiscussionQuerySet.as_manager()

    class Meta:
        ordering = ["created_at"]

    def __str__(self) -> str:
        return f"{self.user_id}: {self.message[:40]}"

    def clean(self) -> None:
        """Messages cannot be blank and replies stay one level deep within the same event."""
        super().clean()
        self.message = (self.message or "").strip()
        if not self.message:
            raise ValidationError({"message": ["Message cannot be empty."]})
        if self.parent is not None:
            if self.parent.event_id != self.event_id:
                raise ValidationError({"parent": ["Replies must belong to the same event."]})
            if self.parent.parent_id is not None:
                raise ValidationError({"parent": ["Cannot reply to a reply."]})
