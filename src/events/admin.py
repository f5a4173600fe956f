import typing as t

from django.contrib import admin
from django.urls import reverse
from django.utils.html import format_html
from simple_history.admin import SimpleHistoryAdmin

from . import models


# --- Helper Mixins for Reusable Link Fields ---
class UserLinkMixin:
    """Mixin to add a link to a user."""

    def user_link(self, obj: t.Any) -> str:
        user = obj.user
        url = reverse("admin:accounts_encoreuser_change", args=[user.id])
        return format_html('<a href="{}">{}</a>', url, user.email)

    user_link.short_description = "User"  # type: ignore[attr-defined]


class EventLinkMixin:
    """Mixin to add a link to an event."""

    def event_link(self, obj: t.Any) -> str | None:
        if not obj.event_id:
            return None
        url = reverse("admin:events_event_change", args=[obj.event_id])
        return format_html('<a href="{}">{}</a>', url, obj.event.title)

    event_link.short_description = "Event"  # type: ignore[attr-defined]


# --- Inlines ---
class EventArtistInline(admin.TabularInline):  # type: ignore[type-arg]
    model = models.EventArtist
    extra = 1
    autocomplete_fields = ["artist"]


class EventScheduleItemInline(admin.TabularInline):  # type: ignore[type-arg]
    model = models.EventScheduleItem
    extra = 1
    fields = ["time", "title", "description"]


class BookingInline(admin.TabularInline):  # type: ignore[type-arg]
    model = models.Booking
    extra = 0
    can_delete = False
    fields = ["attendee_name", "attendee_email", "amount", "payment_method", "status", "created_at"]
    readonly_fields = ["attendee_name", "attendee_email", "amount", "payment_method", "created_at"]


# --- ModelAdmins ---
@admin.register(models.Artist)
class ArtistAdmin(UserLinkMixin, SimpleHistoryAdmin):  # type: ignore[type-arg]
    list_display = ["name", "genre", "location_name", "user_link", "created_at"]
    search_fields = ["name", "genre", "user__email"]
    autocomplete_fields = ["user"]


@admin.register(models.Event)
class EventAdmin(UserLinkMixin, SimpleHistoryAdmin):  # type: ignore[type-arg]
    list_display = ["title", "date", "time", "location_name", "price", "ticket_capacity", "user_link"]
    list_filter = ["date"]
    search_fields = ["title", "location_name", "user__email"]
    date_hierarchy = "date"
    autocomplete_fields = ["user"]
    inlines = [EventArtistInline, EventScheduleItemInline, BookingInline]


@admin.register(models.Booking)
class BookingAdmin(UserLinkMixin, EventLinkMixin, SimpleHistoryAdmin):  # type: ignore[type-arg]
    list_display = ["attendee_name", "attendee_email", "event_link", "amount", "status", "created_at"]
    list_filter = ["status", "payment_method"]
    search_fields = ["attendee_name", "attendee_email", "event__title"]
    list_select_related = ["event", "user"]
    autocomplete_fields = ["event", "user"]


@admin.register(models.EventDiscussion)
class EventDiscussionAdmin(UserLinkMixin, EventLinkMixin, admin.ModelAdmin):  # type: ignore[type-arg]
    list_display = ["short_message", "user_link", "event_link", "parent", "created_at"]
    search_fields = ["message", "user__email", "event__title"]
    list_select_related = ["event", "user"]
    raw_id_fields = ["parent"]

    def short_message(self, obj: models.EventDiscussion) -> str:
        return obj.message[:60]
