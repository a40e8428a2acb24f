from django.contrib import admin

from .models import Booking, BookingDocument


class BookingDocumentInline(admin.TabularInline):
    model = BookingDocument
    extra = 0
    readonly_fields = ("uploaded_at",)


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ("name", "property", "check_in", "check_out", "status", "total_price", "created_at")
    list_filter = ("status", "property")
    search_fields = ("name", "email", "phone", "property__name")
    readonly_fields = ("id", "base_price", "total_price", "created_at", "updated_at")
    inlines = [BookingDocumentInline]
