import logging

from django.core.files.storage import default_storage
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response

from bookings.lifecycle import ACTIVE_STATUSES
from core.exceptions import Conflict
from core.uploads import UploadRejected

from .images import add_property_image, remove_property_image, set_primary_image
from .models import Property
from .serializers import (
    PropertyImageSelectionSerializer,
    PropertyImageUploadSerializer,
    PropertySerializer,
)

logger = logging.getLogger(__name__)

PROPERTY_FILTERS = {
    "is_featured": ["exact"],
    "property_type": ["exact"],
    "location": ["exact", "icontains"],
    "bedrooms": ["exact", "gte"],
    "guests": ["gte"],
    "price": ["lte", "gte"],
}


class PropertyViewSet(viewsets.ReadOnlyModelViewSet):
    """Public catalog: list and detail for every property."""

    serializer_class = PropertySerializer
    permission_classes = [permissions.AllowAny]
    queryset = Property.objects.all()
    filterset_fields = PROPERTY_FILTERS
    search_fields = ["name", "short_description", "location", "description"]
    ordering_fields = ["price", "created_at", "guests"]


class AdminPropertyViewSet(viewsets.ModelViewSet):
    """Back-office CRUD for listings."""

    serializer_class = PropertySerializer
    permission_classes = [permissions.IsAdminUser]
    queryset = Property.objects.all()
    filterset_fields = PROPERTY_FILTERS
    search_fields = ["name", "location", "address"]
    ordering_fields = ["price", "created_at", "name"]

    def perform_create(self, serializer):
        rental = serializer.save()
        logger.info("Property %s created by %s", rental.pk, self.request.user)

    def perform_destroy(self, instance):
        active = instance.bookings.filter(status__in=ACTIVE_STATUSES).count()
        if active:
            raise Conflict(
                f"Cannot delete a property with {active} active booking(s). Cancel them first."
            )
        logger.info("Property %s deleted by %s", instance.pk, self.request.user)
        instance.delete()

    @action(
        detail=True,
        methods=["post", "delete"],
        url_path="images",
        parser_classes=[MultiPartParser, FormParser, JSONParser],
    )
    def images(self, request, pk=None):
        """Upload a listing photo (POST) or remove one by URL (DELETE)."""
        rental = self.get_object()
        try:
            if request.method == "POST":
                upload = PropertyImageUploadSerializer(data=request.data)
                upload.is_valid(raise_exception=True)
                rental = add_property_image(
                    rental,
                    upload.validated_data["image"],
                    primary=upload.validated_data["primary"],
                    url_for=lambda name: request.build_absolute_uri(default_storage.url(name)),
                )
                response_status = status.HTTP_201_CREATED
            else:
                selection = PropertyImageSelectionSerializer(data=request.data)
                selection.is_valid(raise_exception=True)
                rental = remove_property_image(rental, selection.validated_data["url"])
                response_status = status.HTTP_200_OK
        except UploadRejected as exc:
            logger.warning("Rejected image change for property %s: %s", rental.pk, exc)
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(self.get_serializer(rental).data, status=response_status)

    @action(detail=True, methods=["post"], url_path="primary-image")
    def primary_image(self, request, pk=None):
        rental = self.get_object()
        selection = PropertyImageSelectionSerializer(data=request.data)
        selection.is_valid(raise_exception=True)
        try:
            rental = set_primary_image(rental, selection.validated_data["url"])
        except UploadRejected as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(self.get_serializer(rental).data)
