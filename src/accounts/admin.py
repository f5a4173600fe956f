"""Admin interface for accounts app."""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from accounts.models import EncoreUser, UserPreference, UserRole


class UserRoleInline(admin.TabularInline):  # type: ignore[type-arg]
    """Inline for user roles."""

    model = UserRole
    extra = 0
    fields = ["role", "created_at"]
    readonly_fields = ["created_at"]


class UserPreferenceInline(admin.TabularInline):  # type: ignore[type-arg]
    """Inline for stored user preferences."""

    model = UserPreference
    extra = 0
    fields = ["key", "value", "updated_at"]
    readonly_fields = ["updated_at"]


@admin.register(EncoreUser)
class EncoreUserAdmin(UserAdmin):  # type: ignore[type-arg]
    list_display = ["email", "username", "preferred_name", "first_name", "last_name", "is_staff", "date_joined"]
    search_fields = ["email", "username", "preferred_name", "first_name", "last_name"]
    ordering = ["email"]
    inlines = [UserRoleInline, UserPreferenceInline]
    fieldsets = (
        *UserAdmin.fieldsets,  # type: ignore[misc]
        ("Profile", {"fields": ("preferred_name",)}),
    )


@admin.register(UserRole)
class UserRoleAdmin(admin.ModelAdmin):  # type: ignore[type-arg]
    list_display = ["user", "role", "created_at"]
    list_filter = ["role"]
    search_fields = ["user__email"]
    autocomplete_fields = ["user"]
