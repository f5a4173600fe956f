"""Role lookups and role administration."""

import typing as t

import structlog
from django.contrib.auth.models import AnonymousUser
from django.db import transaction
from django.utils.translation import gettext_lazy as _
from ninja.errors import HttpError

from accounts.models import EncoreUser, UserRole

logger = structlog.get_logger(__name__)

Role = UserRole.Role

CREATOR_ROLES = frozenset({Role.ARTIST, Role.ORGANIZER, Role.ADMIN})
SELECTABLE_ROLES = frozenset({Role.ARTIST, Role.ORGANIZER})


def get_roles(user: EncoreUser | AnonymousUser) -> set[str]:
    """Return the set of roles held by the user. Superusers are always admins."""
    if not user.is_authenticated:
        return set()
    roles = {r.role for r in user.roles.all()}  # type: ignore[union-attr]
    if user.is_superuser:
        roles.add(Role.ADMIN)
    return roles


def has_role(user: EncoreUser | AnonymousUser, *roles: str) -> bool:
    """Check whether the user holds any of the given roles."""
    return bool(get_roles(user) & set(roles))


def is_admin(user: EncoreUser | AnonymousUser) -> bool:
    return has_role(user, Role.ADMIN)


def can_create_events(user: EncoreUser | AnonymousUser) -> bool:
    return has_role(user, *CREATOR_ROLES)


def can_create_artist_profile(user: EncoreUser | AnonymousUser) -> bool:
    return has_role(user, *CREATOR_ROLES)


@transaction.atomic
def select_initial_role(user: EncoreUser, role: str) -> UserRole:
    """Let a new user pick artist or organizer once.

    Raises:
        HttpError: If the role cannot be self-assigned or a role was already chosen.
    """
    if role not in SELECTABLE_ROLES:
        raise HttpError(400, str(_("This role cannot be selected.")))
    if get_roles(user) - {Role.VIEWER}:
        raise HttpError(400, str(_("You have already selected a role.")))
    user_role = UserRole.objects.create(user=user, role=role)
    logger.info("role_selected", user_id=str(user.id), role=role)
    return user_role


def add_role(user: EncoreUser, role: str, *, granted_by: EncoreUser) -> UserRole:
    """Grant a role. Granting a role the user already holds is a no-op."""
    user_role, created = UserRole.objects.get_or_create(user=user, role=role)
    if created:
        logger.info("role_granted", user_id=str(user.id), role=role, granted_by=str(granted_by.id))
    return user_role


def remove_role(user: EncoreUser, role: str, *, removed_by: EncoreUser) -> None:
    """Revoke a role.

    Raises:
        HttpError: 400 if an admin tries to drop their own admin role, 404 if the role is not held.
    """
    if user.pk == removed_by.pk and role == Role.ADMIN:
        raise HttpError(400, str(_("You cannot remove your own admin role.")))
    deleted, _deleted_by_model = UserRole.objects.filter(user=user, role=role).delete()
    if not deleted:
        raise HttpError(404, str(_("The user does not have this role.")))
    logger.info("role_revoked", user_id=str(user.id), role=role, removed_by=str(removed_by.id))


def role_flags(user: EncoreUser) -> dict[str, t.Any]:
    """Roles plus the derived capability flags used by clients."""
    roles = get_roles(user)
    return {
        "roles": sorted(roles),
        "can_create_events": bool(roles & CREATOR_ROLES),
        "can_create_artist_profile": bool(roles & CREATOR_ROLES),
    }
