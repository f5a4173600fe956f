import typing as t

from django.contrib.auth.models import AnonymousUser
from ninja_extra import ControllerBase

from accounts.models import EncoreUser


class UserAwareController(ControllerBase):
    def maybe_user(self) -> EncoreUser | AnonymousUser:
        """Get the user for this request."""
        return t.cast(EncoreUser | AnonymousUser, self.context.request.user)  # type: ignore[union-attr]

    def user(self) -> EncoreUser:
        """Get the user for this request."""
        return t.cast(EncoreUser, self.context.request.user)  # type: ignore[union-attr]
