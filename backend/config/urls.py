from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenRefreshView

from accounts.api import AdminUserViewSet, LoginView, MeView
from availability.api import (
    BlockDatesView,
    BlockMultipleDatesView,
    OccupiedDatesView,
    PropertyAvailabilityView,
    PropertyCalendarView,
    UnblockDatesView,
)
from bookings.api import AdminBookingViewSet, BookingViewSet
from properties.api import AdminPropertyViewSet, PropertyViewSet

router = DefaultRouter()
router.register(r"properties", PropertyViewSet, basename="property")
router.register(r"bookings", BookingViewSet, basename="booking")
router.register(r"admin/properties", AdminPropertyViewSet, basename="admin-property")
router.register(r"admin/bookings", AdminBookingViewSet, basename="admin-booking")
router.register(r"admin/users", AdminUserViewSet, basename="admin-user")

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/auth/login/", LoginView.as_view(), name="auth-login"),
    path("api/auth/refresh/", TokenRefreshView.as_view(), name="auth-refresh"),
    path("api/auth/me/", MeView.as_view(), name="auth-me"),
    path(
        "api/properties/<int:property_id>/availability/",
        PropertyAvailabilityView.as_view(),
        name="property-availability",
    ),
    path(
        "api/properties/<int:property_id>/occupied-dates/",
        OccupiedDatesView.as_view(),
        name="property-occupied-dates",
    ),
    path(
        "api/admin/properties/<int:property_id>/calendar/",
        PropertyCalendarView.as_view(),
        name="admin-property-calendar",
    ),
    path(
        "api/admin/properties/<int:property_id>/calendar/block/",
        BlockDatesView.as_view(),
        name="admin-property-block",
    ),
    path(
        "api/admin/properties/<int:property_id>/calendar/block-multiple/",
        BlockMultipleDatesView.as_view(),
        name="admin-property-block-multiple",
    ),
    path(
        "api/admin/properties/<int:property_id>/calendar/unblock/",
        UnblockDatesView.as_view(),
        name="admin-property-unblock",
    ),
    path("api/", include(router.urls)),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
