from django.http import HttpRequest
from ninja_extra import ControllerBase
from ninja_extra.permissions import BasePermission

from accounts.service import roles as roles_service
from events import models


class RootPermission(BasePermission):
    def has_permission(self, request: HttpRequest, controller: ControllerBase) -> bool:
        """Must implement abstract method. This is due to an error in Ninja Extra.

        This Method will be ignored, only has_object_permission will be called.
        """
        return True


class IsEventOwnerOrAdmin(RootPermission):
    message = "Only the event owner or an admin can do this."

    def has_object_permission(self, request: HttpRequest, controller: ControllerBase, obj: models.Event) -> bool:
        """The owner of the event, or any admin."""
        if obj.user_id == request.user.id:
            return True
        return roles_service.is_admin(request.user)  # type: ignore[arg-type]


class IsArtistOwnerOrAdmin(RootPermission):
    message = "Only the artist profile owner or an admin can do this."

    def has_object_permission(self, request: HttpRequest, controller: ControllerBase, obj: models.Artist) -> bool:
        """The owner of the artist profile, or any admin."""
        if obj.user_id == request.user.id:
            return True
        return roles_service.is_admin(request.user)  # type: ignore[arg-type]


class CanDeleteDiscussionMessage(RootPermission):
    message = "Only the author, the event owner or an admin can delete this message."

    def has_object_permission(
        self, request: HttpRequest, controller: ControllerBase, obj: models.EventDiscussion
    ) -> bool:
        """The author of the message, the owner of its event, or any admin."""
        if request.user.id in (obj.user_id, obj.event.user_id):
            return True
        return roles_service.is_admin(request.user)  # type: ignore[arg-type]
