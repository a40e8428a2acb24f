from rest_framework import serializers

from bookings.models import Booking

from .models import BlockedDate


class AvailabilityQuerySerializer(serializers.Serializer):
    check_in = serializers.DateField()
    check_out = serializers.DateField()

    def validate(self, attrs):
        if attrs["check_out"] <= attrs["check_in"]:
            raise serializers.ValidationError("Check-out must be after check-in.")
        return attrs


class DateSelectionSerializer(serializers.Serializer):
    """Either a single ``date`` or a ``start``/``end`` range."""

    date = serializers.DateField(required=False)
    start = serializers.DateField(required=False)
    end = serializers.DateField(required=False)

    def validate(self, attrs):
        has_date = "date" in attrs
        has_range = "start" in attrs or "end" in attrs
        if has_date == has_range:
            raise serializers.ValidationError("Provide either date, or start and end.")
        if has_range:
            if "start" not in attrs or "end" not in attrs:
                raise serializers.ValidationError("Both start and end are required for a range.")
            if attrs["end"] < attrs["start"]:
                raise serializers.ValidationError("End date must be on or after start date.")
        return attrs


class BlockDatesSerializer(DateSelectionSerializer):
    reason = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)


class BlockMultipleDatesSerializer(serializers.Serializer):
    dates = serializers.ListField(child=serializers.DateField(), allow_empty=False, max_length=366)
    reason = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)


class BlockedDateSerializer(serializers.ModelSerializer):
    class Meta:
        model = BlockedDate
        fields = ["id", "date", "reason", "created_at"]


class CalendarBookingSerializer(serializers.ModelSerializer):
    status_display = serializers.CharField(source="get_status_display", read_only=True)

    class Meta:
        model = Booking
        fields = ["id", "name", "email", "check_in", "check_out", "status", "status_display"]
