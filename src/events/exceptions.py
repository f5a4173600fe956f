"""Booking failures.

Every failure is terminal for the submission attempt that raised it. The API turns each into
a short message plus a ``code`` equal to the class name.
"""


class BookingError(Exception):
    """Base class for everything that can stop a booking."""

    status_code = 400
    default_message = "Booking failed."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def code(self) -> str:
        return self.__class__.__name__


class NotSignedIn(BookingError):
    status_code = 401
    default_message = "Please sign in to book tickets."


class ProfileIncomplete(BookingError):
    default_message = "Please add your name and email to your profile before booking."


class EventPast(BookingError):
    default_message = "This event has already taken place."


class SoldOut(BookingError):
    status_code = 429
    default_message = "This event is sold out."


class CapacityExceeded(BookingError):
    default_message = "Not enough tickets left for this request."

    def __init__(self, remaining: int, requested: int) -> None:
        self.remaining = remaining
        self.requested = requested
        super().__init__(f"Only {remaining} ticket{'s' if remaining != 1 else ''} left, {requested} requested.")


class TierUnavailable(BookingError):
    default_message = "The selected price tier is not available."


class InvalidTicketCount(BookingError):
    default_message = "Ticket count must be at least 1."


class ProofRequired(BookingError):
    default_message = "Please upload proof of payment for paid events."


class ProofTooLarge(BookingError):
    status_code = 413
    default_message = "Proof of payment must be 5MB or smaller."


class ProofInvalid(BookingError):
    default_message = "Proof of payment must be an image or a PDF."


class UploadFailed(BookingError):
    status_code = 502
    default_message = "Could not upload the proof of payment."


class PersistFailed(BookingError):
    status_code = 500
    default_message = "Could not save the booking."
