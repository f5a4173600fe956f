"""This module contains the controllers for the account app."""

from ninja_extra import api_controller, route, status
from ninja_jwt.authentication import JWTAuth

from accounts import schema
from accounts.models import EncoreUser
from accounts.service import account as account_service
from accounts.service import roles as roles_service
from accounts.service.user_settings import UserSettings, UserSettingsStore
from common.controllers import UserAwareController
from common.throttling import AuthThrottle, UserRegistrationThrottle


@api_controller("/account", tags=["Account"], throttle=AuthThrottle())
class AccountController(UserAwareController):
    @route.get("/me", response=schema.EncoreUserSchema, url_name="me", auth=JWTAuth())
    def me(self) -> EncoreUser:
        """Retrieve the authenticated user's profile information."""
        return self.user()

    @route.put("/me", response=schema.EncoreUserSchema, url_name="update-profile", auth=JWTAuth())
    def update_profile(self, payload: schema.ProfileUpdateSchema) -> EncoreUser:
        """Update the authenticated user's names.

        The preferred name (or first and last name) is what gets recorded as the attendee name
        on new bookings. Only provided fields are updated.
        """
        return account_service.update_profile(self.user(), payload)

    @route.post(
        "/register",
        response={201: schema.EncoreUserSchema},
        url_name="register-account",
        throttle=UserRegistrationThrottle(),
    )
    def register(self, payload: schema.RegisterUserSchema) -> tuple[int, EncoreUser]:
        """Create a new user account with email and password.

        New accounts start with the viewer role. Returns 400 if the email is already taken.
        """
        user = account_service.register_user(payload)
        return status.HTTP_201_CREATED, user

    @route.get("/me/roles", response=schema.RolesSchema, url_name="my-roles", auth=JWTAuth())
    def my_roles(self) -> dict[str, object]:
        """List the caller's roles and what they allow."""
        return roles_service.role_flags(self.user())

    @route.post("/me/roles", response={201: schema.RolesSchema}, url_name="select-role", auth=JWTAuth())
    def select_role(self, payload: schema.SelectRoleSchema) -> tuple[int, dict[str, object]]:
        """Pick artist or organizer as your role. This can only be done once."""
        user = self.user()
        roles_service.select_initial_role(user, payload.role)
        return status.HTTP_201_CREATED, roles_service.role_flags(user)

    @route.get("/settings", response=UserSettings, url_name="get-settings", auth=JWTAuth())
    def get_settings(self) -> UserSettings:
        """Retrieve the caller's settings, falling back to defaults for anything never set."""
        return UserSettingsStore(self.user()).load()

    @route.patch("/settings", response=UserSettings, url_name="update-settings", auth=JWTAuth())
    def update_settings(self, payload: schema.UserSettingsUpdateSchema) -> UserSettings:
        """Change one or more settings. Omitted fields keep their current value."""
        return UserSettingsStore(self.user()).update(**payload.model_dump(exclude_none=True))
