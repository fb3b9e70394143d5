from rest_framework import serializers

from booking.models import Booking
from coupon.models import Coupon


class PriceSnapshotSerializer(serializers.Serializer):
    """Price breakdown stored on a booking."""

    nights = serializers.IntegerField()
    base_price_per_night = serializers.DecimalField(max_digits=10, decimal_places=2)
    base_price_total = serializers.DecimalField(max_digits=12, decimal_places=2)
    cleaning_fee = serializers.DecimalField(max_digits=10, decimal_places=2)
    service_fee = serializers.DecimalField(max_digits=10, decimal_places=2)
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2)
    coupon_code = serializers.CharField(allow_null=True)
    coupon_discount_percentage = serializers.DecimalField(
        max_digits=5, decimal_places=2, allow_null=True
    )
    discounts = serializers.DecimalField(max_digits=12, decimal_places=2)
    total_price = serializers.DecimalField(max_digits=12, decimal_places=2)


class AppliedCouponSerializer(serializers.ModelSerializer):
    """Coupon usage as seen right after it was applied to a booking."""

    class Meta:
        model = Coupon
        fields = ("id", "code", "discount_percentage", "current_uses", "max_uses")


class BookingReadSerializer(serializers.ModelSerializer):
    """Serializer for reading booking data."""

    hotel_name = serializers.CharField(source="hotel.name", read_only=True)
    price_snapshot = PriceSnapshotSerializer(read_only=True)

    class Meta:
        """Meta configuration for BookingReadSerializer."""

        model = Booking
        fields = (
            "id",
            "hotel",
            "hotel_name",
            "guest",
            "check_in_date",
            "check_out_date",
            "guests",
            "status",
            "price_snapshot",
            "applied_coupon_code",
            "confirmed_by",
            "cancelled_by",
            "cancellation_reason",
            "refund_amount",
            "created_at",
            "confirmed_at",
            "checked_in_at",
            "checked_out_at",
            "completed_at",
            "cancelled_at",
        )
        read_only_fields = fields


class StayRequestSerializer(serializers.Serializer):
    """Hotel, dates and party size of a requested stay."""

    hotel = serializers.IntegerField(min_value=1)
    check_in_date = serializers.DateField()
    check_out_date = serializers.DateField()
    guests = serializers.IntegerField(min_value=1)
    coupon_code = serializers.CharField(
        max_length=20, required=False, allow_blank=True, allow_null=True
    )

    def validate(self, attrs):
        """Validate that check-out date is after check-in date."""
        if attrs["check_out_date"] <= attrs["check_in_date"]:
            raise serializers.ValidationError(
                {"check_out_date": "Check-out date must be after check-in date."}
            )
        return attrs


class BookingCreateSerializer(StayRequestSerializer):
    """Serializer for creating a booking."""


class BookingQuoteSerializer(StayRequestSerializer):
    """Serializer for pricing a stay without booking it."""


class BookingRescheduleSerializer(serializers.Serializer):
    """
    New dates for an existing booking.

    The date order is checked by the reschedule service so that an inverted
    range is reported as an invalid date range.
    """

    check_in_date = serializers.DateField()
    check_out_date = serializers.DateField()


class BookingReasonSerializer(serializers.Serializer):
    """Optional free-text reason for cancelling or rejecting a booking."""

    reason = serializers.CharField(required=False, allow_blank=True, default="")
