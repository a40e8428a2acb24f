from datetime import timedelta
from decimal import Decimal

from django.apps import apps
from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.utils import timezone

from availability.models import BlockedDate
from bookings.models import Booking
from bookings.pricing import compute_base_price, compute_total_price
from properties.models import Property

User = get_user_model()

SUPERUSER_EMAIL = "admin@gounarentals.test"
SUPERUSER_PASSWORD = "AdminGouna123!"

SAMPLE_PROPERTIES = [
    {
        "name": "Lagoon View Villa",
        "short_description": "Four-bedroom villa with a private pool on the lagoon.",
        "location": "West Golf, El Gouna",
        "address": "Villa 12, West Golf",
        "property_type": Property.TYPE_VILLA,
        "price": Decimal("220.00"),
        "bedrooms": 4,
        "bathrooms": 3,
        "guests": 8,
        "features": ["Private pool", "Lagoon view", "Garden", "Wi-Fi"],
        "images": ["https://images.gounarentals.test/lagoon-villa/1.jpg"],
        "is_featured": True,
    },
    {
        "name": "Marina Apartment",
        "short_description": "Bright two-bedroom flat overlooking Abu Tig Marina.",
        "location": "Abu Tig Marina, El Gouna",
        "address": "Building B4, Abu Tig Marina",
        "property_type": Property.TYPE_APARTMENT,
        "price": Decimal("95.00"),
        "bedrooms": 2,
        "bathrooms": 1,
        "guests": 4,
        "features": ["Marina view", "Air conditioning", "Wi-Fi"],
        "images": ["https://images.gounarentals.test/marina-apartment/1.jpg"],
        "is_featured": True,
    },
    {
        "name": "Downtown Studio",
        "short_description": "Compact studio a short walk from Kafr El Gouna.",
        "location": "Downtown, El Gouna",
        "address": "Kafr El Gouna 7",
        "property_type": Property.TYPE_STUDIO,
        "price": Decimal("55.00"),
        "bedrooms": 1,
        "bathrooms": 1,
        "guests": 2,
        "features": ["Balcony", "Wi-Fi"],
        "images": [],
        "is_featured": False,
    },
]


class Command(BaseCommand):
    help = "Populate the local development database with sample properties, bookings and blocks."

    def handle(self, *args, **options):
        if not settings.DEBUG:
            raise CommandError("Refusing to seed data while DEBUG is False.")

        with transaction.atomic():
            self.stdout.write(self.style.MIGRATE_HEADING("Ensuring admin superuser"))
            self._ensure_superuser()

            self.stdout.write(self.style.MIGRATE_HEADING("Creating properties"))
            rentals = [self._ensure_property(data) for data in SAMPLE_PROPERTIES]

            self.stdout.write(self.style.MIGRATE_HEADING("Cleaning old seed bookings"))
            Booking.objects.filter(property__in=rentals, email__endswith="@example.test").delete()
            BlockedDate.objects.filter(property__in=rentals).delete()

            self.stdout.write(self.style.MIGRATE_HEADING("Creating bookings"))
            today = timezone.localdate()
            villa, apartment, studio = rentals
            self._create_booking(villa, "Greta Guest", today + timedelta(days=5), 4, Booking.Status.CONFIRMED)
            self._create_booking(villa, "Paul Pending", today + timedelta(days=14), 3, Booking.Status.AWAITING_CONFIRMATION)
            self._create_booking(apartment, "Una Unpaid", today + timedelta(days=3), 2, Booking.Status.AWAITING_PAYMENT)
            self._create_booking(apartment, "Carl Cancelled", today + timedelta(days=9), 5, Booking.Status.CANCELLED)

            self.stdout.write(self.style.MIGRATE_HEADING("Blocking maintenance dates"))
            blocking = apps.get_app_config("availability").blocking
            result = blocking.block_date_range(
                studio.pk,
                today + timedelta(days=20),
                today + timedelta(days=22),
                "Maintenance",
            )
            if not result.success:
                raise CommandError(f"Could not block studio dates: {result.error}")

        self.stdout.write(self.style.SUCCESS("Seed data ready."))
        self.stdout.write(f"Admin login: {SUPERUSER_EMAIL} / {SUPERUSER_PASSWORD}")

    def _ensure_property(self, data: dict) -> Property:
        defaults = dict(data)
        name = defaults.pop("name")
        rental, _ = Property.objects.update_or_create(name=name, defaults=defaults)
        return rental

    def _create_booking(self, rental: Property, name: str, check_in, nights: int, status: str) -> Booking:
        check_out = check_in + timedelta(days=nights)
        base_price = compute_base_price(rental.price, check_in, check_out)
        slug = name.lower().replace(" ", ".")
        return Booking.objects.create(
            property=rental,
            name=name,
            email=f"{slug}@example.test",
            phone="+20 100 000 0000",
            check_in=check_in,
            check_out=check_out,
            guests=min(2, rental.guests),
            base_price=base_price,
            total_price=compute_total_price(base_price),
            status=status,
        )

    def _ensure_superuser(self):
        user, created = User.objects.get_or_create(
            email=SUPERUSER_EMAIL,
            defaults={
                "username": SUPERUSER_EMAIL,
                "first_name": "Admin",
                "last_name": "User",
                "is_staff": True,
                "is_superuser": True,
            },
        )
        flag_updates = {}
        if not user.is_staff:
            flag_updates["is_staff"] = True
        if not user.is_superuser:
            flag_updates["is_superuser"] = True
        if flag_updates:
            for attr, value in flag_updates.items():
                setattr(user, attr, value)
            user.save(update_fields=list(flag_updates.keys()))
        if created or not user.has_usable_password():
            user.set_password(SUPERUSER_PASSWORD)
            user.save(update_fields=["password"])
        return user
