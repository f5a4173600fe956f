import typing as t
from uuid import UUID

from ninja import Query
from ninja_extra import api_controller, route, status
from ninja_jwt.authentication import JWTAuth

from accounts.permissions import CanCreateEvents
from common.authentication import OptionalAuth
from common.controllers import UserAwareController
from common.schema import ValidationErrorResponse
from common.throttling import WriteThrottle
from events import models, schema
from events.service import event_service, pricing

from .permissions import IsEventOwnerOrAdmin


@api_controller("/events", auth=OptionalAuth(), tags=["Events"])
class EventController(UserAwareController):
    def get_queryset(self) -> models.event.EventQuerySet:
        return models.Event.objects.with_details()

    def get_one(self, event_id: UUID) -> models.Event:
        """Wrapper helper. Runs the route's object permissions."""
        return t.cast(models.Event, self.get_object_or_exception(self.get_queryset(), pk=event_id))

    @route.get("", url_name="list-events", response=list[schema.EventInListSchema])
    def list_events(self, params: schema.EventFilterSchema = Query(...)) -> list[models.Event]:
        """Browse the event catalogue.

        `date_filter` narrows by time (`upcoming`, `past`, `this-week`, `this-month`), `date_from` and
        `date_to` bound the date inclusively, `location` matches part of the venue name, and `sort`
        orders by date, price or name. The catalogue is not paginated.
        """
        return event_service.list_events(params)

    @route.post(
        "",
        url_name="create-event",
        response={201: schema.EventDetailSchema, 400: ValidationErrorResponse},
        auth=JWTAuth(),
        permissions=[CanCreateEvents()],
        throttle=WriteThrottle(),
    )
    def create_event(self, payload: schema.EventCreateSchema) -> tuple[int, models.Event]:
        """Create an event. Requires the artist, organizer or admin role."""
        event = event_service.create_event(self.user(), payload)
        return status.HTTP_201_CREATED, self.get_queryset().get(pk=event.pk)

    @route.get("/{event_id}", url_name="get-event", response=schema.EventDetailSchema)
    def get_event(self, event_id: UUID) -> models.Event:
        """Event details with line-up, schedule, price tiers and payment handles."""
        return self.get_one(event_id)

    @route.put(
        "/{event_id}",
        url_name="update-event",
        response={200: schema.EventDetailSchema, 400: ValidationErrorResponse},
        auth=JWTAuth(),
        permissions=[IsEventOwnerOrAdmin()],
        throttle=WriteThrottle(),
    )
    def update_event(self, event_id: UUID, payload: schema.EventEditSchema) -> models.Event:
        """Update an event. Omitted fields are left unchanged; `artist_ids` replaces the line-up."""
        event = event_service.update_event(self.get_one(event_id), payload)
        return self.get_queryset().get(pk=event.pk)

    @route.delete(
        "/{event_id}",
        url_name="delete-event",
        response={204: None},
        auth=JWTAuth(),
        permissions=[IsEventOwnerOrAdmin()],
        throttle=WriteThrottle(),
    )
    def delete_event(self, event_id: UUID) -> tuple[int, None]:
        """Delete an event together with its bookings, schedule and discussion."""
        event_service.delete_event(self.get_one(event_id), deleted_by=self.user())
        return status.HTTP_204_NO_CONTENT, None

    @route.get("/{event_id}/availability", url_name="event-availability", response=schema.AvailabilitySchema)
    def get_availability(self, event_id: UUID) -> pricing.Availability:
        """Seats left, how many tickets can be picked at once, and which price tiers are on sale."""
        return event_service.get_availability(self.get_one(event_id))

    @route.post(
        "/{event_id}/transfer-ownership",
        url_name="transfer-event-ownership",
        response=schema.EventDetailSchema,
        auth=JWTAuth(),
        permissions=[IsEventOwnerOrAdmin()],
        throttle=WriteThrottle(),
    )
    def transfer_ownership(self, event_id: UUID, payload: schema.TransferOwnershipSchema) -> models.Event:
        """Hand the event to another user, who must be an artist, organizer or admin."""
        event = event_service.transfer_ownership(self.get_one(event_id), payload.email, actor=self.user())
        return self.get_queryset().get(pk=event.pk)

