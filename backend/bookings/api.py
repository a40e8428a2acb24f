import logging

from django.apps import apps
from django.db import transaction
from rest_framework import mixins, permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response

from availability.services.results import DATA_ACCESS_FAILURE
from core.uploads import UploadRejected
from properties.models import Property

from . import lifecycle
from .models import Booking
from .pricing import apply_cleaning_fee, compute_base_price, compute_total_price
from .serializers import (
    BookingAdminSerializer,
    BookingCreateSerializer,
    BookingStatusSerializer,
    BookingStatusUpdateSerializer,
    CleaningFeeSerializer,
)
from .services.documents import attach_documents
from .services.emails import send_booking_received_email, send_booking_status_email

logger = logging.getLogger(__name__)


class BookingViewSet(
    mixins.CreateModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    Guest-facing booking flow. Bookings are addressed by UUID, which is the
    guest's only credential for checking status and uploading documents.
    """

    serializer_class = BookingStatusSerializer
    permission_classes = [permissions.AllowAny]
    queryset = Booking.objects.select_related("property")

    def create(self, request, *args, **kwargs):
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        engine = apps.get_app_config("availability").engine

        with transaction.atomic():
            # serialises concurrent requests for the same property
            rental = Property.objects.select_for_update().get(pk=data["property"].pk)
            availability = engine.check_availability(rental.pk, data["check_in"], data["check_out"])
            if not availability.available:
                code = (
                    status.HTTP_503_SERVICE_UNAVAILABLE
                    if availability.error_code == DATA_ACCESS_FAILURE
                    else status.HTTP_409_CONFLICT
                )
                return Response(
                    {
                        "detail": availability.error or "The selected dates are not available.",
                        "code": availability.error_code,
                    },
                    status=code,
                )
            base_price = compute_base_price(rental.price, data["check_in"], data["check_out"])
            booking = serializer.save(
                property=rental,
                base_price=base_price,
                total_price=compute_total_price(base_price),
                status=Booking.Status.AWAITING_PAYMENT,
            )

        logger.info(
            "Booking %s created for property %s (%s to %s)",
            booking.pk,
            rental.pk,
            booking.check_in,
            booking.check_out,
        )
        send_booking_received_email(booking)
        output = BookingStatusSerializer(booking, context=self.get_serializer_context())
        return Response(output.data, status=status.HTTP_201_CREATED)

    @action(
        detail=True,
        methods=["post"],
        url_path="documents",
        parser_classes=[MultiPartParser, FormParser],
    )
    def documents(self, request, pk=None):
        booking = self.get_object()
        try:
            attach_documents(
                booking,
                payment_proof=request.FILES.get("payment_proof"),
                id_documents=request.FILES.getlist("id_documents"),
            )
        except UploadRejected as exc:
            logger.warning("Rejected upload for booking %s: %s", booking.pk, exc)
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        output = BookingStatusSerializer(booking, context=self.get_serializer_context())
        return Response(output.data, status=status.HTTP_200_OK)


class AdminBookingViewSet(viewsets.ReadOnlyModelViewSet):
    """Back-office review of bookings."""

    serializer_class = BookingAdminSerializer
    permission_classes = [permissions.IsAdminUser]
    queryset = Booking.objects.select_related("property").prefetch_related("documents")
    filterset_fields = ["status", "property", "check_in"]
    search_fields = ["name", "email", "phone", "property__name"]
    ordering_fields = ["created_at", "check_in", "total_price"]
    ordering = ["-created_at"]

    @action(detail=True, methods=["post"], url_path="status")
    def update_status(self, request, pk=None):
        booking = self.get_object()
        serializer = BookingStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            lifecycle.transition(booking, serializer.validated_data["status"])
        except lifecycle.InvalidStatusTransition as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        if serializer.validated_data["notify_guest"]:
            send_booking_status_email(booking)
        output = BookingAdminSerializer(booking, context=self.get_serializer_context())
        return Response(output.data)

    @action(detail=True, methods=["post"], url_path="cleaning-fee")
    def cleaning_fee(self, request, pk=None):
        booking = self.get_object()
        serializer = CleaningFeeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        apply_cleaning_fee(booking, serializer.validated_data["cleaning_fee"])
        logger.info(
            "Booking %s cleaning fee set to %s (total %s)",
            booking.pk,
            booking.cleaning_fee,
            booking.total_price,
        )
        output = BookingAdminSerializer(booking, context=self.get_serializer_context())
        return Response(output.data)
