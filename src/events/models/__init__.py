from .artist import Artist
from .booking import Booking
from .discussion import EventDiscussion
from .event import Event, EventArtist, PaymentInstructions, PriceTier, parse_price
from .program import EventScheduleItem

__all__ = [
    "Artist",
    "Booking",
    "Event",
    "EventArtist",
    "EventDiscussion",
    "EventScheduleItem",
    "PaymentInstructions",
    "PriceTier",
    "parse_price",
]
