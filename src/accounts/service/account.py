"""Service layer for accounts."""

import structlog
from django.db import transaction
from django.utils.translation import gettext_lazy as _
from ninja.errors import HttpError

from accounts import schema
from accounts.models import EncoreUser

logger = structlog.get_logger(__name__)


@transaction.atomic
def register_user(payload: schema.RegisterUserSchema) -> EncoreUser:
    """Register a new user.

    The viewer role is assigned by the post_save signal.

    Args:
        payload (schema.RegisterUserSchema): The user data.

    Returns:
        EncoreUser: The newly created user.
    """
    email = payload.email.lower()
    logger.info("user_registration_started", email=email)
    if EncoreUser.objects.filter(email__iexact=email).exists():
        logger.warning("user_registration_duplicate", email=email)
        raise HttpError(400, str(_("A user with this email already exists.")))
    new_user = EncoreUser.objects.create_user(
        username=email,
        email=email,
        password=payload.password1,
        first_name=payload.first_name,
        last_name=payload.last_name,
        preferred_name=payload.preferred_name,
    )
    logger.info("user_registration_completed", user_id=str(new_user.id))
    return new_user


def update_profile(user: EncoreUser, payload: schema.ProfileUpdateSchema) -> EncoreUser:
    """Update the names on a user's profile. Only provided fields are changed."""
    data = payload.model_dump(exclude_none=True)
    for key, value in data.items():
        setattr(user, key, value)
    user.save(update_fields=list(data.keys()))
    logger.info("profile_updated", user_id=str(user.id), fields=sorted(data))
    return user


def resolve_attendee(user: EncoreUser) -> tuple[str, str]:
    """Resolve the name and email to record on a booking.

    Falls back to the username when no name is set. Either value may be empty,
    in which case the caller decides how to fail.
    """
    name = (user.preferred_name or user.get_full_name() or user.username or "").strip()
    email = (user.email or "").strip()
    return name[:100], email
