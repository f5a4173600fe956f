import re
import typing as t
import uuid

from django.conf import settings
from django.contrib.auth.models import AbstractUser, UserManager
from django.db import models

from common.models import TimeStampedModel


class EncoreUserQueryset(models.QuerySet["EncoreUser"]):
    """Queryset for EncoreUser."""

    def with_roles(self) -> t.Self:
        """Prefetch the roles of each user."""
        return self.prefetch_related("roles")


class EncoreUserManager(UserManager["EncoreUser"]):
    def get_queryset(self) -> EncoreUserQueryset:
        """Get queryset for EncoreUser."""
        return EncoreUserQueryset(self.model)

    def with_roles(self) -> EncoreUserQueryset:
        """Prefetch the roles of each user."""
        return self.get_queryset().with_roles()


class EncoreUser(AbstractUser):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, max_length=255)
    preferred_name = models.CharField(max_length=100, blank=True, help_text="Name shown on bookings")

    objects = EncoreUserManager()  # type: ignore[misc]

    class Meta:
        ordering = ["username"]

    @property
    def display_name(self) -> str:
        """Display name."""
        return self.get_display_name()

    def get_display_name(self) -> str:
        """Returns the user's preferred name, or their full name as a fallback."""
        return (
            self.preferred_name or self.get_full_name() or re.sub(r"(\W|_)+", " ", self.username.split("@")[0]).title()
        )


class UserRole(TimeStampedModel):
    class Role(models.TextChoices):
        VIEWER = "viewer", "Viewer"
        ARTIST = "artist", "Artist"
        ORGANIZER = "organizer", "Organizer"
        ADMIN = "admin", "Admin"

    user = models.ForeignKey(EncoreUser, on_delete=models.CASCADE, related_name="roles")
    role = models.CharField(max_length=20, choices=Role.choices, db_index=True)

    class Meta:
        constraints = [models.UniqueConstraint(fields=["user", "role"], name="unique_user_role")]
        ordering = ["role"]

    def __str__(self) -> str:
        return f"{self.user} ({self.role})"


class UserPreference(TimeStampedModel):
    """A single persisted preference value for a user, stored under a key."""

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="preferences")
    key = models.CharField(max_length=64)
    value = models.JSONField(default=dict, blank=True)

    class Meta:
        constraints = [models.UniqueConstraint(fields=["user", "key"], name="unique_user_preference_key")]

    def __str__(self) -> str:
        return f"{self.user} - {self.key}"
