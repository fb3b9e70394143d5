from rest_framework import serializers

from booking.models import Booking
from payment.models import Payment


class PaymentSerializer(serializers.ModelSerializer):
    """Serializer for Payment model."""

    booking_status = serializers.CharField(source="booking.status", read_only=True)

    class Meta:
        model = Payment
        fields = (
            "id",
            "booking",
            "booking_status",
            "status",
            "money_to_pay",
            "provider_ref",
            "created_at",
        )
        read_only_fields = fields


class PaymentConfirmSerializer(serializers.Serializer):
    """Input of a simulated payment: which booking and whether it went through."""

    booking = serializers.PrimaryKeyRelatedField(queryset=Booking.objects.all())
    success = serializers.BooleanField(default=True)
    provider_ref = serializers.CharField(max_length=100, required=False, allow_blank=True)
