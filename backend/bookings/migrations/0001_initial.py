import uuid

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("properties", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Booking",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=200)),
                ("email", models.EmailField(max_length=254)),
                ("phone", models.CharField(max_length=30)),
                ("check_in", models.DateField()),
                ("check_out", models.DateField()),
                ("guests", models.PositiveIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)])),
                ("base_price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("cleaning_fee", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("total_price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("status", models.CharField(choices=[("awaiting_payment", "Awaiting payment"), ("awaiting_confirmation", "Awaiting confirmation"), ("confirmed", "Confirmed"), ("cancelled", "Cancelled")], db_index=True, default="awaiting_payment", max_length=24)),
                ("payment_proof", models.FileField(blank=True, upload_to="payment-proofs/")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("property", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="bookings", to="properties.property")),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["property", "status"], name="booking_property_status")],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("check_out__gt", models.F("check_in"))), name="booking_check_out_after_check_in"),
                ],
            },
        ),
        migrations.CreateModel(
            name="BookingDocument",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("file", models.FileField(upload_to="id-documents/")),
                ("original_name", models.CharField(blank=True, max_length=255)),
                ("uploaded_at", models.DateTimeField(auto_now_add=True)),
                ("booking", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="documents", to="bookings.booking")),
            ],
            options={
                "ordering": ["uploaded_at", "id"],
            },
        ),
    ]
