from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models


class Hotel(models.Model):
    """
    Listing offered by a host.

    ``total_rooms`` is the number of interchangeable units that can be
    booked for the same night; ``max_guests`` caps the party size of a
    single booking.
    """

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="hotels"
    )
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)

    max_guests = models.PositiveIntegerField(
        default=1, validators=[MinValueValidator(1)]
    )
    bedrooms = models.PositiveIntegerField(default=1)
    bathrooms = models.PositiveIntegerField(default=1)
    total_rooms = models.PositiveIntegerField(
        default=1, validators=[MinValueValidator(1)]
    )

    base_price_per_night = models.DecimalField(
        max_digits=10, decimal_places=2, validators=[MinValueValidator(0)]
    )
    cleaning_fee = models.DecimalField(
        max_digits=10, decimal_places=2, default=0, validators=[MinValueValidator(0)]
    )
    service_fee = models.DecimalField(
        max_digits=10, decimal_places=2, default=0, validators=[MinValueValidator(0)]
    )

    is_approved = models.BooleanField(default=False)
    is_suspended = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)

    PRICING_FIELDS = ("base_price_per_night", "cleaning_fee", "service_fee")

    class Meta:
        ordering = ("id",)
        constraints = [
            models.CheckConstraint(
                condition=models.Q(total_rooms__gte=1),
                name="hotel_total_rooms_positive",
            ),
            models.CheckConstraint(
                condition=models.Q(max_guests__gte=1),
                name="hotel_max_guests_positive",
            ),
        ]

    def __str__(self):
        return self.name

    @property
    def is_bookable(self):
        return self.is_approved and not self.is_suspended
