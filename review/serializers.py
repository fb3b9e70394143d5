from rest_framework import serializers

from review.models import Review


class ReviewSerializer(serializers.ModelSerializer):
    """Serializer for Review model."""

    guest = serializers.CharField(source="guest.username", read_only=True)

    class Meta:
        model = Review
        fields = (
            "id",
            "booking",
            "hotel",
            "guest",
            "rating",
            "comment",
            "reply_text",
            "replied_at",
            "created_at",
        )
        read_only_fields = fields


class ReviewCreateSerializer(serializers.Serializer):
    booking = serializers.IntegerField(min_value=1)
    rating = serializers.IntegerField(min_value=1, max_value=5)
    comment = serializers.CharField(
        max_length=1000, required=False, allow_blank=True, default=""
    )


class ReviewReplySerializer(serializers.Serializer):
    text = serializers.CharField(max_length=1000, trim_whitespace=True)


class HotelRatingSerializer(serializers.Serializer):
    hotel = serializers.IntegerField()
    average_rating = serializers.DecimalField(
        max_digits=3, decimal_places=2, allow_null=True
    )
    review_count = serializers.IntegerField()


class HotelQuerySerializer(serializers.Serializer):
    hotel = serializers.IntegerField(min_value=1)
