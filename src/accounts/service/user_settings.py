"""Per-user settings, persisted as a single key/value preference row."""

import typing as t

import structlog
from django.db import transaction
from pydantic import BaseModel, ValidationError

from accounts.models import EncoreUser, UserPreference

logger = structlog.get_logger(__name__)

SETTINGS_KEY = "user_settings"


class UserSettings(BaseModel):
    """Settings the client applies to the session and UI."""

    stay_signed_in: bool = True
    theme: t.Literal["light", "dark", "system"] = "system"
    email_notifications: bool = True
    event_reminders: bool = True


class UserSettingsStore:
    """Loads and saves :class:`UserSettings` for one user."""

    def __init__(self, user: EncoreUser) -> None:
        self.user = user

    def load(self) -> UserSettings:
        """Return the stored settings, or the defaults when nothing valid is stored."""
        pref = UserPreference.objects.filter(user=self.user, key=SETTINGS_KEY).first()
        if pref is None:
            return UserSettings()
        try:
            return UserSettings.model_validate(pref.value)
        except ValidationError:
            logger.warning("user_settings_invalid", user_id=str(self.user.id))
            return UserSettings()

    def save(self, user_settings: UserSettings) -> UserSettings:
        UserPreference.objects.update_or_create(
            user=self.user, key=SETTINGS_KEY, defaults={"value": user_settings.model_dump(mode="json")}
        )
        return user_settings

    @transaction.atomic
    def update(self, **changes: t.Any) -> UserSettings:
        """Merge the given changes into the stored settings."""
        current = self.load()
        updated = UserSettings.model_validate({**current.model_dump(), **changes})
        logger.info("user_settings_updated", user_id=str(self.user.id), fields=sorted(changes))
        return self.save(updated)
