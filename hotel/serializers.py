from rest_framework import serializers

from hotel.models import Hotel


class HotelSerializer(serializers.ModelSerializer):
    """Serializer for Hotel model."""

    owner = serializers.PrimaryKeyRelatedField(read_only=True)

    class Meta:
        model = Hotel
        fields = (
            "id",
            "owner",
            "name",
            "description",
            "max_guests",
            "bedrooms",
            "bathrooms",
            "total_rooms",
            "base_price_per_night",
            "cleaning_fee",
            "service_fee",
            "is_approved",
            "is_suspended",
            "created_at",
        )
        read_only_fields = ("is_approved", "is_suspended", "created_at")


class HotelCalendarSerializer(serializers.Serializer):
    """Serializer for hotel availability calendar response."""

    date = serializers.DateField()
    rooms_left = serializers.IntegerField()
    available = serializers.BooleanField()
