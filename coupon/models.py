from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import F, Q

from hotel.models import Hotel


class Coupon(models.Model):
    """
    Percentage discount code scoped to one hotel.

    Codes are stored upper-cased, which makes the per-hotel uniqueness
    constraint case-insensitive. ``current_uses`` only ever grows.
    """

    hotel = models.ForeignKey(Hotel, on_delete=models.CASCADE, related_name="coupons")
    code = models.CharField(max_length=20)
    discount_percentage = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
    )
    valid_from = models.DateField()
    valid_to = models.DateField()
    max_uses = models.PositiveIntegerField(null=True, blank=True)
    current_uses = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("-created_at", "-id")
        constraints = [
            models.UniqueConstraint(
                fields=["hotel", "code"], name="unique_coupon_code_per_hotel"
            ),
            models.CheckConstraint(
                condition=Q(discount_percentage__gte=0)
                & Q(discount_percentage__lte=100),
                name="coupon_discount_percentage_range",
            ),
            models.CheckConstraint(
                condition=Q(valid_to__gte=F("valid_from")),
                name="coupon_valid_to_after_valid_from",
            ),
            models.CheckConstraint(
                condition=Q(max_uses__isnull=True)
                | Q(current_uses__lte=F("max_uses")),
                name="coupon_uses_within_limit",
            ),
        ]

    def __str__(self):
        return self.code

    def save(self, *args, **kwargs):
        self.code = (self.code or "").strip().upper()
        super().save(*args, **kwargs)

    @property
    def is_exhausted(self):
        return self.max_uses is not None and self.current_uses >= self.max_uses

    def is_valid_on(self, on_date):
        return self.valid_from <= on_date <= self.valid_to
