from django.contrib import admin
from simple_history.admin import SimpleHistoryAdmin

from common.models import SiteContent


@admin.register(SiteContent)
class SiteContentAdmin(SimpleHistoryAdmin):  # type: ignore[type-arg]
    list_display = ["page_key", "title", "updated_by", "updated_at"]
    search_fields = ["page_key", "title"]
    readonly_fields = ["updated_by", "created_at", "updated_at"]

    def save_model(self, request, obj, form, change):  # type: ignore[no-untyped-def]
        obj.updated_by = request.user
        super().save_model(request, obj, form, change)
