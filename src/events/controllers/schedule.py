import typing as t
from uuid import UUID

from django.db.models import QuerySet
from django.shortcuts import get_object_or_404
from ninja_extra import api_controller, route, status
from ninja_jwt.authentication import JWTAuth

from common.authentication import OptionalAuth
from common.controllers import UserAwareController
from common.throttling import WriteThrottle
from events import models, schema
from events.service import event_service

from .permissions import IsEventOwnerOrAdmin


@api_controller("/events/{event_id}/schedule", auth=OptionalAuth(), tags=["Event Schedule"])
class EventScheduleController(UserAwareController):
    def get_event(self, event_id: UUID) -> models.Event:
        """Wrapper helper. Runs the route's object permissions."""
        return t.cast(models.Event, self.get_object_or_exception(models.Event, pk=event_id))

    def get_item(self, event_id: UUID, item_id: UUID) -> models.EventScheduleItem:
        event = self.get_event(event_id)
        return get_object_or_404(models.EventScheduleItem, pk=item_id, event=event)

    @route.get("", url_name="list-schedule", response=list[schema.ScheduleItemSchema])
    def list_schedule(self, event_id: UUID) -> QuerySet[models.EventScheduleItem]:
        """The running order of the event, by time."""
        return event_service.get_schedule(self.get_event(event_id))

    @route.post(
        "",
        url_name="add-schedule-item",
        response={201: schema.ScheduleItemSchema},
        auth=JWTAuth(),
        permissions=[IsEventOwnerOrAdmin()],
        throttle=WriteThrottle(),
    )
    def add_item(
        self, event_id: UUID, payload: schema.ScheduleItemCreateSchema
    ) -> tuple[int, models.EventScheduleItem]:
        """Add a slot to the running order."""
        return status.HTTP_201_CREATED, event_service.add_schedule_item(self.get_event(event_id), payload)

    @route.put(
        "/{item_id}",
        url_name="update-schedule-item",
        response=schema.ScheduleItemSchema,
        auth=JWTAuth(),
        permissions=[IsEventOwnerOrAdmin()],
        throttle=WriteThrottle(),
    )
    def update_item(
        self, event_id: UUID, item_id: UUID, payload: schema.ScheduleItemEditSchema
    ) -> models.EventScheduleItem:
        """Change a slot. Omitted fields are left unchanged."""
        return event_service.update_schedule_item(self.get_item(event_id, item_id), payload)

    @route.delete(
        "/{item_id}",
        url_name="delete-schedule-item",
        response={204: None},
        auth=JWTAuth(),
        permissions=[IsEventOwnerOrAdmin()],
        throttle=WriteThrottle(),
    )
    def delete_item(self, event_id: UUID, item_id: UUID) -> tuple[int, None]:
        """Remove a slot from the running order."""
        self.get_item(event_id, item_id).delete()
        return status.HTTP_204_NO_CONTENT, None
