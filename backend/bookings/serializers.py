from django.utils import timezone
from rest_framework import serializers

from properties.models import Property

from .models import Booking, BookingDocument


class BookingCreateSerializer(serializers.ModelSerializer):
    """Validate a guest's booking request. Prices are computed server-side."""

    property = serializers.PrimaryKeyRelatedField(queryset=Property.objects.all())

    class Meta:
        model = Booking
        fields = ["property", "name", "email", "phone", "check_in", "check_out", "guests"]

    def validate_name(self, value: str) -> str:
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Name is required.")
        return value

    def validate_email(self, value: str) -> str:
        return value.strip().lower()

    def validate_phone(self, value: str) -> str:
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Phone is required.")
        return value

    def validate(self, attrs):
        check_in = attrs["check_in"]
        check_out = attrs["check_out"]
        if check_out <= check_in:
            raise serializers.ValidationError({"check_out": "Check-out must be after check-in."})
        if check_in < timezone.localdate():
            raise serializers.ValidationError({"check_in": "Check-in cannot be in the past."})
        rental = attrs["property"]
        if attrs.get("guests", 1) > rental.guests:
            raise serializers.ValidationError(
                {"guests": f"This property accommodates at most {rental.guests} guests."}
            )
        return attrs


class BookingDocumentSerializer(serializers.ModelSerializer):
    url = serializers.FileField(source="file", read_only=True)

    class Meta:
        model = BookingDocument
        fields = ["id", "original_name", "url", "uploaded_at"]


class BookingStatusSerializer(serializers.ModelSerializer):
    """What a guest sees when looking up their booking."""

    property_name = serializers.CharField(source="property.name", read_only=True)
    property_location = serializers.CharField(source="property.location", read_only=True)
    status_display = serializers.CharField(source="get_status_display", read_only=True)
    nights = serializers.IntegerField(read_only=True)
    has_payment_proof = serializers.SerializerMethodField()
    document_count = serializers.SerializerMethodField()

    class Meta:
        model = Booking
        fields = [
            "id",
            "property",
            "property_name",
            "property_location",
            "name",
            "check_in",
            "check_out",
            "nights",
            "guests",
            "base_price",
            "cleaning_fee",
            "total_price",
            "status",
            "status_display",
            "has_payment_proof",
            "document_count",
            "created_at",
        ]
        read_only_fields = fields

    def get_has_payment_proof(self, obj) -> bool:
        return bool(obj.payment_proof)

    def get_document_count(self, obj) -> int:
        return obj.documents.count()


class BookingAdminSerializer(serializers.ModelSerializer):
    property_name = serializers.CharField(source="property.name", read_only=True)
    property_location = serializers.CharField(source="property.location", read_only=True)
    status_display = serializers.CharField(source="get_status_display", read_only=True)
    nights = serializers.IntegerField(read_only=True)
    payment_proof = serializers.FileField(read_only=True, allow_null=True)
    documents = BookingDocumentSerializer(many=True, read_only=True)

    class Meta:
        model = Booking
        fields = [
            "id",
            "property",
            "property_name",
            "property_location",
            "name",
            "email",
            "phone",
            "check_in",
            "check_out",
            "nights",
            "guests",
            "base_price",
            "cleaning_fee",
            "total_price",
            "status",
            "status_display",
            "payment_proof",
            "documents",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class BookingStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Booking.Status.choices)
    notify_guest = serializers.BooleanField(default=True)


class CleaningFeeSerializer(serializers.Serializer):
    cleaning_fee = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
