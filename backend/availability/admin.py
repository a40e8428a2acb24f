from django.contrib import admin

from .models import BlockedDate


@admin.register(BlockedDate)
class BlockedDateAdmin(admin.ModelAdmin):
    list_display = ("property", "date", "reason", "created_at")
    list_filter = ("property",)
    search_fields = ("property__name", "reason")
    date_hierarchy = "date"
