from django.http import HttpRequest
from ninja_extra import ControllerBase
from ninja_extra.permissions import BasePermission

from accounts.service import roles as roles_service


class IsAdmin(BasePermission):
    def has_permission(self, request: HttpRequest, controller: ControllerBase) -> bool:
        return roles_service.is_admin(request.user)  # type: ignore[arg-type]


class CanCreateEvents(BasePermission):
    message = "Only artists, organizers and admins can do this."

    def has_permission(self, request: HttpRequest, controller: ControllerBase) -> bool:
        return roles_service.can_create_events(request.user)  # type: ignore[arg-type]
