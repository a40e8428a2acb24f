from django.contrib import admin

from .models import Property


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    list_display = ("name", "location", "property_type", "price", "guests", "is_featured")
    list_filter = ("property_type", "is_featured")
    search_fields = ("name", "location", "address")
