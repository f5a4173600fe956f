"""Admin-only user and role management."""

from uuid import UUID

from django.db.models import QuerySet
from django.shortcuts import get_object_or_404
from ninja_extra import api_controller, route, status
from ninja_extra.pagination import PageNumberPaginationExtra, PaginatedResponseSchema, paginate
from ninja_extra.searching import Searching, searching
from ninja_jwt.authentication import JWTAuth

from accounts import schema
from accounts.models import EncoreUser
from accounts.permissions import IsAdmin
from accounts.service import roles as roles_service
from common.controllers import UserAwareController
from common.throttling import WriteThrottle


@api_controller("/admin/users", tags=["Admin"], auth=JWTAuth(), permissions=[IsAdmin()])
class UserAdminController(UserAwareController):
    @route.get("/", response=PaginatedResponseSchema[schema.UserWithRolesSchema], url_name="admin-list-users")
    @paginate(PageNumberPaginationExtra, page_size=50)
    @searching(Searching, search_fields=["email", "first_name", "last_name", "preferred_name"])
    def list_users(self) -> QuerySet[EncoreUser]:
        """List all users with their roles."""
        return EncoreUser.objects.with_roles().order_by("email")

    @route.post(
        "/{user_id}/roles",
        response={201: schema.UserWithRolesSchema},
        url_name="admin-add-role",
        throttle=WriteThrottle(),
    )
    def add_role(self, user_id: UUID, payload: schema.GrantRoleSchema) -> tuple[int, EncoreUser]:
        """Grant a role to a user. Granting a role the user already holds is a no-op."""
        target = get_object_or_404(EncoreUser, pk=user_id)
        roles_service.add_role(target, payload.role, granted_by=self.user())
        return status.HTTP_201_CREATED, target

    @route.delete(
        "/{user_id}/roles/{role}",
        response={204: None},
        url_name="admin-remove-role",
        throttle=WriteThrottle(),
    )
    def remove_role(self, user_id: UUID, role: schema.RoleName) -> tuple[int, None]:
        """Revoke a role from a user. Admins cannot revoke their own admin role."""
        target = get_object_or_404(EncoreUser, pk=user_id)
        roles_service.remove_role(target, role, removed_by=self.user())
        return status.HTTP_204_NO_CONTENT, None
