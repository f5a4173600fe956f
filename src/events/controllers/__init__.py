from .artists import ArtistController
from .audit import AuditController
from .bookings import EventBookingController, MyBookingController
from .discussions import EventDiscussionController
from .events import EventController
from .schedule import EventScheduleController

EVENT_CONTROLLERS: list[type] = [
    EventController,
    EventScheduleController,
    EventDiscussionController,
    EventBookingController,
    MyBookingController,
    ArtistController,
    AuditController,
]

__all__ = [
    "ArtistController",
    "AuditController",
    "EventBookingController",
    "EventController",
    "EventDiscussionController",
    "EventScheduleController",
    "MyBookingController",
    "EVENT_CONTROLLERS",
]
