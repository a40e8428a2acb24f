from dataclasses import asdict

from django.apps import apps
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView

from bookings.lifecycle import ACTIVE_STATUSES
from properties.models import Property

from .serializers import (
    AvailabilityQuerySerializer,
    BlockDatesSerializer,
    BlockedDateSerializer,
    BlockMultipleDatesSerializer,
    CalendarBookingSerializer,
    DateSelectionSerializer,
)
from .services import results

ERROR_STATUS = {
    results.INVALID_ARGUMENT: status.HTTP_400_BAD_REQUEST,
    results.DATA_ACCESS_FAILURE: status.HTTP_503_SERVICE_UNAVAILABLE,
    results.DUPLICATE_BLOCK: status.HTTP_409_CONFLICT,
    results.DATE_BLOCKED: status.HTTP_409_CONFLICT,
    results.DATE_HAS_BOOKING: status.HTTP_409_CONFLICT,
    results.PARTIAL_CONFLICT: status.HTTP_409_CONFLICT,
}


def _result_response(result, success_status=status.HTTP_200_OK) -> Response:
    payload = asdict(result)
    if result.success:
        return Response(payload, status=success_status)
    payload["detail"] = result.error
    return Response(
        payload,
        status=ERROR_STATUS.get(result.error_code, status.HTTP_400_BAD_REQUEST),
    )


def _occupied_payload(occupied) -> dict:
    return {
        "all": occupied.all_dates,
        "by_status": occupied.by_status,
        "blocked": occupied.blocked,
        "error": occupied.error,
        "error_code": occupied.error_code,
    }


class PropertyCalendarBaseView(APIView):
    rental: Property | None = None

    def initial(self, request, *args, **kwargs):
        super().initial(request, *args, **kwargs)
        self.rental = get_object_or_404(Property, pk=kwargs.get("property_id"))

    @property
    def engine(self):
        return apps.get_app_config("availability").engine

    @property
    def blocking(self):
        return apps.get_app_config("availability").blocking


class PropertyAvailabilityView(PropertyCalendarBaseView):
    """Answer whether a property is free for a check-in/check-out pair."""

    permission_classes = [AllowAny]

    def get(self, request, property_id, *args, **kwargs):
        query = AvailabilityQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        result = self.engine.check_availability(
            self.rental.pk,
            query.validated_data["check_in"],
            query.validated_data["check_out"],
        )
        return Response(asdict(result))


class OccupiedDatesView(PropertyCalendarBaseView):
    """Days the booking calendar should disable."""

    permission_classes = [AllowAny]

    def get(self, request, property_id, *args, **kwargs):
        occupied = self.engine.get_occupied_dates(self.rental.pk)
        return Response(_occupied_payload(occupied))


class PropertyCalendarView(PropertyCalendarBaseView):
    """Admin calendar: active bookings, manual blocks and the occupancy buckets."""

    permission_classes = [IsAdminUser]

    def get(self, request, property_id, *args, **kwargs):
        bookings = self.rental.bookings.filter(status__in=ACTIVE_STATUSES).order_by("check_in")
        blocked = self.rental.blocked_dates.order_by("date")
        return Response(
            {
                "property": {"id": self.rental.pk, "name": self.rental.name},
                "bookings": CalendarBookingSerializer(bookings, many=True).data,
                "blocked_dates": BlockedDateSerializer(blocked, many=True).data,
                "occupied": _occupied_payload(self.engine.get_occupied_dates(self.rental.pk)),
            }
        )


class BlockDatesView(PropertyCalendarBaseView):
    permission_classes = [IsAdminUser]

    def post(self, request, property_id, *args, **kwargs):
        serializer = BlockDatesSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        reason = data.get("reason") or None
        if "date" in data:
            result = self.blocking.block_date(self.rental.pk, data["date"], reason)
        else:
            result = self.blocking.block_date_range(self.rental.pk, data["start"], data["end"], reason)
        return _result_response(result, success_status=status.HTTP_201_CREATED)


class BlockMultipleDatesView(PropertyCalendarBaseView):
    """Best-effort blocking of a scattered set of days."""

    permission_classes = [IsAdminUser]

    def post(self, request, property_id, *args, **kwargs):
        serializer = BlockMultipleDatesSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = self.blocking.block_multiple_dates(
            self.rental.pk,
            serializer.validated_data["dates"],
            serializer.validated_data.get("reason") or None,
        )
        return _result_response(result, success_status=status.HTTP_201_CREATED)


class UnblockDatesView(PropertyCalendarBaseView):
    permission_classes = [IsAdminUser]

    def post(self, request, property_id, *args, **kwargs):
        serializer = DateSelectionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        if "date" in data:
            result = self.blocking.unblock_date(self.rental.pk, data["date"])
        else:
            result = self.blocking.unblock_date_range(self.rental.pk, data["start"], data["end"])
        return _result_response(result)
