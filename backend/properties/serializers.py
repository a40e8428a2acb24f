from rest_framework import serializers

from .models import Property


class PropertySerializer(serializers.ModelSerializer):
    """Catalog representation of a rental property."""

    features = serializers.ListField(
        child=serializers.CharField(max_length=120, allow_blank=True), required=False
    )
    images = serializers.ListField(child=serializers.URLField(), required=False)
    primary_image = serializers.CharField(read_only=True, allow_null=True)
    property_type_display = serializers.CharField(
        source="get_property_type_display", read_only=True
    )

    class Meta:
        model = Property
        fields = [
            "id",
            "name",
            "short_description",
            "description",
            "location",
            "address",
            "property_type",
            "property_type_display",
            "price",
            "bedrooms",
            "bathrooms",
            "guests",
            "features",
            "images",
            "primary_image",
            "is_featured",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_images(self, value):
        seen = set()
        ordered = []
        for url in value:
            if url not in seen:
                seen.add(url)
                ordered.append(url)
        return ordered

    def validate_features(self, value):
        return [feature.strip() for feature in value if feature.strip()]


class PropertyImageUploadSerializer(serializers.Serializer):
    image = serializers.FileField()
    primary = serializers.BooleanField(default=False)


class PropertyImageSelectionSerializer(serializers.Serializer):
    url = serializers.URLField()
