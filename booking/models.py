from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import F, ForeignKey, Q

from booking.pricing import Pricing, PriceSnapshot
from hotel.models import Hotel


class Booking(models.Model):
    """
    Guest reservation of hotel inventory for a date range.
    The check-out date is exclusive. The price snapshot columns are written
    once at creation or reschedule time and are the amount charged or refunded.
    """

    class BookingStatus(models.TextChoices):
        """Enumeration of possible booking statuses."""

        PENDING = "pending"
        CONFIRMED = "confirmed"
        CHECKED_IN = "checked-in"
        CHECKED_OUT = "checked-out"
        COMPLETED = "completed"
        CANCELLED = "cancelled"

    class Actor(models.TextChoices):
        """Who triggered a status transition."""

        GUEST = "guest"
        HOST = "host"
        PAYMENT = "payment"
        SYSTEM = "system"

    hotel = ForeignKey(Hotel, on_delete=models.PROTECT, related_name="bookings")
    guest = ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="bookings"
    )
    check_in_date = models.DateField()
    check_out_date = models.DateField()
    guests = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    status = models.CharField(
        choices=BookingStatus, max_length=20, default=BookingStatus.PENDING
    )

    nights = models.PositiveIntegerField()
    base_price_per_night = models.DecimalField(max_digits=10, decimal_places=2)
    base_price_total = models.DecimalField(max_digits=12, decimal_places=2)
    cleaning_fee = models.DecimalField(max_digits=10, decimal_places=2)
    service_fee = models.DecimalField(max_digits=10, decimal_places=2)
    subtotal = models.DecimalField(max_digits=12, decimal_places=2)
    coupon_discount_percentage = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
    )
    discounts = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    total_price = models.DecimalField(max_digits=12, decimal_places=2)

    coupon = ForeignKey(
        "coupon.Coupon",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="bookings",
    )
    applied_coupon_code = models.CharField(max_length=20, null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    confirmed_at = models.DateTimeField(null=True, blank=True)
    confirmed_by = models.CharField(choices=Actor, max_length=20, blank=True)
    checked_in_at = models.DateTimeField(null=True, blank=True)
    checked_out_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)
    cancelled_by = models.CharField(choices=Actor, max_length=20, blank=True)
    cancellation_reason = models.TextField(blank=True)
    refund_amount = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True
    )

    SNAPSHOT_FIELDS = (
        "nights",
        "base_price_per_night",
        "base_price_total",
        "cleaning_fee",
        "service_fee",
        "subtotal",
        "coupon_discount_percentage",
        "discounts",
        "total_price",
    )

    class Meta:
        """Meta configuration for Booking model."""

        ordering = ("-created_at", "-id")
        indexes = [
            models.Index(
                fields=["hotel", "status", "check_in_date"],
                name="booking_hotel_status_idx",
            ),
            models.Index(fields=["guest", "status"], name="booking_guest_status_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(check_out_date__gt=F("check_in_date")),
                name="check_out_after_check_in",
            ),
            models.CheckConstraint(
                condition=Q(guests__gte=1),
                name="booking_guests_positive",
            ),
        ]

    def __str__(self):
        return f"Booking #{self.pk} ({self.status})"

    @property
    def price_snapshot(self) -> PriceSnapshot:
        return PriceSnapshot(
            nights=self.nights,
            base_price_per_night=self.base_price_per_night,
            base_price_total=self.base_price_total,
            cleaning_fee=self.cleaning_fee,
            service_fee=self.service_fee,
            subtotal=self.subtotal,
            coupon_code=self.applied_coupon_code,
            coupon_discount_percentage=self.coupon_discount_percentage,
            discounts=self.discounts,
            total_price=self.total_price,
        )

    @property
    def snapshot_pricing(self) -> Pricing:
        """Nightly rate and fees this booking was priced with."""
        return Pricing(
            base_price_per_night=self.base_price_per_night,
            cleaning_fee=self.cleaning_fee,
            service_fee=self.service_fee,
        )

    def apply_price_snapshot(self, snapshot: PriceSnapshot) -> None:
        for field in self.SNAPSHOT_FIELDS:
            setattr(self, field, getattr(snapshot, field))
        self.applied_coupon_code = snapshot.coupon_code
