from django.db import models

from common.models import TimeStampedModel

from .event import Event


class EventScheduleItem(TimeStampedModel):
    """One slot in an event's running order."""

    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="schedule_items")
    time = models.TimeField()
    title = models.CharField(max_length=200)
    description = models.TextField(max_length=1000, blank=True)

    class Meta:
        ordering = ["time", "created_at"]

    def __str__(self) -> str:
        return f"{self.time:%H:%M} {self.title}"
