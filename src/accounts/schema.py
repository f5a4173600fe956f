"""Schema for accounts module."""

import typing as t

from ninja import ModelSchema, Schema
from pydantic import UUID4, Field, model_validator

from accounts.models import EncoreUser
from accounts.password_validation import validate_password
from common.schema import EmailAddress, UpToHundredString, UpToOneFiftyString

RoleName = t.Literal["viewer", "artist", "organizer", "admin"]


class EncoreUserSchema(ModelSchema):
    id: UUID4
    email: str
    preferred_name: str
    first_name: str
    last_name: str
    display_name: str

    class Meta:
        model = EncoreUser
        fields = ["email", "first_name", "last_name", "preferred_name"]


class MinimalEncoreUserSchema(Schema):
    id: UUID4
    display_name: str


class PasswordMixin(Schema):
    password1: str = Field(..., description="Password", min_length=8, max_length=150)
    password2: str = Field(..., description="Password confirmation", min_length=8, max_length=150)

    @model_validator(mode="after")
    def password_match(self) -> t.Self:
        """Validate that the passwords match."""
        if self.password1 != self.password2:
            raise ValueError("Passwords do not match")
        return self


class RegisterUserSchema(PasswordMixin):
    email: EmailAddress
    first_name: UpToOneFiftyString = ""
    last_name: UpToOneFiftyString = ""
    preferred_name: UpToHundredString = ""

    @model_validator(mode="after")
    def validate_password(self) -> t.Self:
        """Validate the password."""
        tmp_user = EncoreUser(
            email=self.email, username=self.email, first_name=self.first_name, last_name=self.last_name
        )
        validate_password(self.password1, user=tmp_user)
        return self


class ProfileUpdateSchema(Schema):
    """Schema for updating user profile information. Omitted fields are left unchanged."""

    preferred_name: UpToHundredString | None = None
    first_name: UpToOneFiftyString | None = None
    last_name: UpToOneFiftyString | None = None


class RolesSchema(Schema):
    roles: list[RoleName]
    can_create_events: bool
    can_create_artist_profile: bool


class SelectRoleSchema(Schema):
    role: t.Literal["artist", "organizer"]


class GrantRoleSchema(Schema):
    role: RoleName


class UserWithRolesSchema(ModelSchema):
    display_name: str
    roles: list[RoleName]

    class Meta:
        model = EncoreUser
        fields = ["id", "email", "first_name", "last_name"]

    @staticmethod
    def resolve_roles(obj: EncoreUser) -> list[str]:
        return sorted(r.role for r in obj.roles.all())


class UserSettingsUpdateSchema(Schema):
    stay_signed_in: bool | None = None
    theme: t.Literal["light", "dark", "system"] | None = None
    email_notifications: bool | None = None
    event_reminders: bool | None = None
