from django.db import models

from booking.models import Booking


class Payment(models.Model):
    """
    Simulated payment for a booking.

    No gateway is involved: the outcome is supplied by the caller and only
    the booking transition it triggers matters.
    """

    class PaymentStatus(models.TextChoices):
        PENDING = "PENDING"
        PAID = "PAID"
        FAILED = "FAILED"

    booking = models.ForeignKey(
        Booking, on_delete=models.CASCADE, related_name="payments"
    )
    status = models.CharField(
        choices=PaymentStatus, max_length=20, default=PaymentStatus.PENDING
    )
    money_to_pay = models.DecimalField(max_digits=12, decimal_places=2)
    provider_ref = models.CharField(max_length=100, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ("-id",)

    def __str__(self):
        return f"Payment #{self.pk} ({self.status})"
