from django.db import models


class BlockedDate(models.Model):
    """A calendar day an administrator has closed for a property."""

    property = models.ForeignKey(
        "properties.Property",
        on_delete=models.CASCADE,
        related_name="blocked_dates",
    )
    date = models.DateField()
    reason = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ("date",)
        constraints = [
            models.UniqueConstraint(fields=("property", "date"), name="unique_property_blocked_date"),
        ]

    def __str__(self):
        return f"{self.property_id} blocked {self.date}"
