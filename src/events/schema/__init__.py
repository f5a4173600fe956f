"""Events schema package.

Schemas are split into modules that mirror the models package and re-exported here.
"""

from .artist import ArtistCreateSchema, ArtistEditSchema, ArtistSchema, MinimalArtistSchema
from .audit import FieldChangeSchema, HistoryEntrySchema
from .booking import (
    BookingConfirmationSchema,
    BookingSchema,
    BookingStatusUpdateSchema,
    BookingSubmitSchema,
    EventBookingsSchema,
    MyBookingSchema,
    OrganizerBookingSchema,
    QuoteSchema,
)
from .discussion import DiscussionCreateSchema, DiscussionReplySchema, DiscussionThreadSchema
from .event import (
    AvailabilitySchema,
    EventCreateSchema,
    EventDetailSchema,
    EventEditSchema,
    EventFilterSchema,
    EventInListSchema,
    MinimalEventSchema,
    TierOptionSchema,
    TransferOwnershipSchema,
)
from .mixins import LocationEditMixin, LocationRetrieveMixin, ensure_url
from .schedule import ScheduleItemCreateSchema, ScheduleItemEditSchema, ScheduleItemSchema

__all__ = [
    # Artist
    "ArtistCreateSchema",
    "ArtistEditSchema",
    "ArtistSchema",
    "MinimalArtistSchema",
    # Audit
    "FieldChangeSchema",
    "HistoryEntrySchema",
    # Booking
    "BookingConfirmationSchema",
    "BookingSchema",
    "BookingStatusUpdateSchema",
    "BookingSubmitSchema",
    "EventBookingsSchema",
    "MyBookingSchema",
    "OrganizerBookingSchema",
    "QuoteSchema",
    # Discussion
    "DiscussionCreateSchema",
    "DiscussionReplySchema",
    "DiscussionThreadSchema",
    # Event
    "AvailabilitySchema",
    "EventCreateSchema",
    "EventDetailSchema",
    "EventEditSchema",
    "EventFilterSchema",
    "EventInListSchema",
    "MinimalEventSchema",
    "TierOptionSchema",
    "TransferOwnershipSchema",
    # Mixins
    "LocationEditMixin",
    "LocationRetrieveMixin",
    "ensure_url",
    # Schedule
    "ScheduleItemCreateSchema",
    "ScheduleItemEditSchema",
    "ScheduleItemSchema",
]
