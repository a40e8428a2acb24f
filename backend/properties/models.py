from django.core.validators import MinValueValidator
from django.db import models


class Property(models.Model):
    """A rental listing shown in the public catalog."""

    TYPE_APARTMENT = "apartment"
    TYPE_VILLA = "villa"
    TYPE_CHALET = "chalet"
    TYPE_STUDIO = "studio"
    PROPERTY_TYPES = [
        (TYPE_APARTMENT, "Apartment"),
        (TYPE_VILLA, "Villa"),
        (TYPE_CHALET, "Chalet"),
        (TYPE_STUDIO, "Studio"),
    ]

    name = models.CharField(max_length=200)
    # one-line teaser shown on catalog cards
    short_description = models.CharField(max_length=300, blank=True)
    description = models.TextField(blank=True)
    location = models.CharField(max_length=200)
    address = models.CharField(max_length=255, blank=True)
    property_type = models.CharField(max_length=20, choices=PROPERTY_TYPES, default=TYPE_APARTMENT)
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    bedrooms = models.PositiveIntegerField(default=1)
    bathrooms = models.PositiveIntegerField(default=1)
    guests = models.PositiveIntegerField(default=2, validators=[MinValueValidator(1)])
    # amenity labels, e.g. ["Pool", "Sea view"]
    features = models.JSONField(default=list, blank=True)
    # image URLs; the first entry is the primary image
    images = models.JSONField(default=list, blank=True)
    is_featured = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        verbose_name_plural = "properties"

    def __str__(self):
        return self.name

    @property
    def primary_image(self) -> str | None:
        return self.images[0] if self.images else None
