"""Service for submitting ticket bookings."""

import typing as t
from dataclasses import dataclass

import structlog
from django.conf import settings
from django.contrib.auth.models import AnonymousUser
from django.core.exceptions import SuspiciousOperation
from django.core.files.storage import default_storage
from django.core.files.uploadedfile import UploadedFile
from django.db import DatabaseError, transaction
from django.utils import timezone
from simple_history.utils import bulk_create_with_history

from accounts.models import EncoreUser
from accounts.service.account import resolve_attendee
from common.utils import file_extension
from events.exceptions import (
    NotSignedIn,
    PersistFailed,
    ProfileIncomplete,
    ProofInvalid,
    ProofRequired,
    ProofTooLarge,
    UploadFailed,
)
from events.models import Booking, Event
from events.service import pricing
from events.service.calendar_utils import build_calendar_link
from notifications.service.dispatcher import notify_booking_status

logger = structlog.get_logger(__name__)

ALLOWED_PROOF_CONTENT_TYPES = frozenset({"image/jpeg", "image/png", "image/webp", "application/pdf"})
# Sent by clients that do not sniff the file. The extension alone decides then.
GENERIC_CONTENT_TYPES = frozenset({"", "application/octet-stream"})


@dataclass(frozen=True)
class BookingConfirmation:
    bookings: list[Booking]
    quote: pricing.Quote
    calendar_link: str
    message: str


def success_message(quote: pricing.Quote) -> str:
    ticket_text = f"{quote.count} tickets" if quote.count > 1 else "1 ticket"
    if quote.is_free:
        return f"{ticket_text} confirmed!"
    return f"{ticket_text} submitted! Awaiting organizer confirmation. Total: {quote.total_amount:.2f}"


class BookingService:
    """Turns a booking request into booking rows and their side effects.

    Handles:
    - Identity and profile preconditions
    - Pricing and capacity checks, repeated under a row lock on the event
    - Proof-of-payment validation and upload for paid events
    - One Booking row per ticket, created in one batch
    - Confirmation email for free (auto-confirmed) bookings
    """

    def __init__(self, event: Event, user: EncoreUser | AnonymousUser | None) -> None:
        """Initialize the booking service.

        Args:
            event: The event being booked.
            user: The attendee. Anonymous users are rejected on submit.
        """
        self.event = event
        self.user = user

    def _require_user(self) -> EncoreUser:
        if self.user is None or not self.user.is_authenticated:
            raise NotSignedIn()
        return t.cast(EncoreUser, self.user)

    def _require_attendee(self, user: EncoreUser) -> tuple[str, str]:
        name, email = resolve_attendee(user)
        if not name or not email:
            raise ProfileIncomplete()
        return name, email

    def quote(self, count: int, tier_id: str | None = None) -> pricing.Quote:
        """Price the request against the current booking count, without locking."""
        return pricing.evaluate(
            self.event,
            count=count,
            existing_bookings=Booking.objects.active_count(self.event),
            now=timezone.now(),
            tier_id=tier_id,
        )

    @staticmethod
    def validate_proof(proof: UploadedFile | None) -> UploadedFile:
        """Check a proof-of-payment file before anything is uploaded.

        Raises:
            ProofRequired: No file was attached.
            ProofTooLarge: The file is over the configured size limit.
            ProofInvalid: The extension is not an allowed image or PDF one, or the declared content type
                contradicts it.
        """
        if proof is None:
            raise ProofRequired()
        max_bytes = settings.PAYMENT_PROOF_MAX_BYTES
        if proof.size is not None and proof.size > max_bytes:
            raise ProofTooLarge(f"Proof of payment must be {max_bytes // (1024 * 1024)}MB or smaller.")
        extension = file_extension(proof.name or "")
        content_type = (getattr(proof, "content_type", None) or "").lower()
        if extension not in settings.PAYMENT_PROOF_EXTENSIONS:
            raise ProofInvalid()
        if content_type not in GENERIC_CONTENT_TYPES and content_type not in ALLOWED_PROOF_CONTENT_TYPES:
            raise ProofInvalid()
        return proof

    def proof_path(self, user: EncoreUser, proof: UploadedFile) -> str:
        """Storage path ``payment-proofs/{user}/{event}/{epoch_ms}.{ext}`` for a proof that passed validate_proof."""
        extension = file_extension(proof.name or "")
        timestamp_ms = int(timezone.now().timestamp() * 1000)
        return f"{settings.PAYMENT_PROOF_DIRECTORY}/{user.id}/{self.event.id}/{timestamp_ms}.{extension}"

    def upload_proof(self, user: EncoreUser, proof: UploadedFile) -> str:
        """Store the proof file and return its storage name.

        Raises:
            UploadFailed: The storage backend rejected the file.
        """
        path = self.proof_path(user, proof)
        try:
            stored_name = default_storage.save(path, proof)
        except (OSError, ValueError, SuspiciousOperation) as e:
            logger.error(
                "payment_proof_upload_failed", event_id=str(self.event.id), user_id=str(user.id), error=str(e)
            )
            raise UploadFailed(f"Could not upload the proof of payment: {e}") from e
        logger.info("payment_proof_uploaded", event_id=str(self.event.id), user_id=str(user.id), path=stored_name)
        return stored_name

    @transaction.atomic
    def _create_bookings(
        self,
        *,
        user: EncoreUser,
        count: int,
        tier_id: str | None,
        attendee_name: str,
        attendee_email: str,
        proof_name: str,
    ) -> tuple[list[Booking], pricing.Quote]:
        """Re-check capacity while holding the event row lock, then insert one row per ticket."""
        locked_event = Event.objects.select_for_update().get(pk=self.event.pk)
        existing = Booking.objects.filter(event=locked_event).active().count()
        quote = pricing.evaluate(
            locked_event, count=count, existing_bookings=existing, now=timezone.now(), tier_id=tier_id
        )
        status = Booking.Status.CONFIRMED if quote.is_free else Booking.Status.PENDING
        payment_method = Booking.PaymentMethod.FREE if quote.is_free else Booking.PaymentMethod.DIRECT
        rows = [
            Booking(
                event=locked_event,
                user=user,
                attendee_name=attendee_name,
                attendee_email=attendee_email,
                amount=quote.unit_price,
                payment_method=payment_method,
                proof_of_payment=proof_name,
                status=status,
            )
            for _ in range(count)
        ]
        return bulk_create_with_history(rows, Booking, default_user=user), quote

    def submit(
        self,
        count: int,
        *,
        tier_id: str | None = None,
        proof: UploadedFile | None = None,
    ) -> BookingConfirmation:
        """Book ``count`` tickets for the current user.

        All validation happens before the proof upload, so a rejected request has no side effects.
        A proof that was uploaded stays in storage if the insert then fails.

        Args:
            count: Number of tickets, one Booking row each.
            tier_id: Optional price tier identifier.
            proof: Proof of payment, required when the quote is not free.

        Returns:
            The created bookings, the quote, a calendar link and a summary message.

        Raises:
            BookingError: One of its subclasses, naming the reason.
        """
        user = self._require_user()
        attendee_name, attendee_email = self._require_attendee(user)
        quote = self.quote(count, tier_id)
        proof_name = ""
        if not quote.is_free:
            proof_name = self.upload_proof(user, self.validate_proof(proof))

        logger.info(
            "booking_submission_started",
            user_id=str(user.id),
            event_id=str(self.event.id),
            ticket_count=count,
            tier_id=tier_id,
            is_free=quote.is_free,
        )
        try:
            bookings, quote = self._create_bookings(
                user=user,
                count=count,
                tier_id=tier_id,
                attendee_name=attendee_name,
                attendee_email=attendee_email,
                proof_name=proof_name,
            )
        except DatabaseError as e:
            logger.error("booking_persist_failed", event_id=str(self.event.id), user_id=str(user.id), error=str(e))
            raise PersistFailed(f"Could not save the booking: {e}") from e

        logger.info(
            "booking_submitted",
            user_id=str(user.id),
            event_id=str(self.event.id),
            ticket_count=len(bookings),
            status=bookings[0].status,
            total_amount=str(quote.total_amount),
        )

        if quote.is_free:
            self._notify_confirmed(bookings)

        return BookingConfirmation(
            bookings=bookings,
            quote=quote,
            calendar_link=build_calendar_link(self.event, count),
            message=success_message(quote),
        )

    def _notify_confirmed(self, bookings: list[Booking]) -> None:
        try:
            notify_booking_status(bookings, Booking.Status.CONFIRMED)
        except Exception:
            logger.exception("booking_confirmation_notification_failed", event_id=str(self.event.id))
