from rest_framework import serializers

from common.exceptions import Unauthorized
from coupon.models import Coupon
from coupon.validators import (
    validate_coupon_code_format,
    validate_coupon_window,
    validate_max_uses,
)
from hotel.models import Hotel


class CouponSerializer(serializers.ModelSerializer):
    """
    Serializer for Coupon model.

    The hotel and the code of an existing coupon cannot be changed, and
    ``current_uses`` is maintained by bookings only.
    """

    hotel = serializers.PrimaryKeyRelatedField(queryset=Hotel.objects.all())

    class Meta:
        model = Coupon
        fields = (
            "id",
            "hotel",
            "code",
            "discount_percentage",
            "valid_from",
            "valid_to",
            "max_uses",
            "current_uses",
            "created_at",
            "updated_at",
        )
        read_only_fields = ("current_uses", "created_at", "updated_at")
        # Uniqueness per hotel is checked in validate() on the normalized code.
        validators = []

    def validate_code(self, value):
        return validate_coupon_code_format(value)

    def validate_hotel(self, hotel):
        request = self.context["request"]
        if hotel.owner_id != request.user.pk:
            raise Unauthorized("Only the host of this hotel can manage its coupons.")
        if hotel.is_suspended:
            raise serializers.ValidationError(
                "Coupons cannot be created for a suspended hotel."
            )
        return hotel

    def validate(self, attrs):
        instance = self.instance

        if instance is not None:
            if "hotel" in attrs and attrs["hotel"].pk != instance.hotel_id:
                raise serializers.ValidationError(
                    {"hotel": "The hotel of a coupon cannot be changed."}
                )
            if "code" in attrs and attrs["code"] != instance.code:
                raise serializers.ValidationError(
                    {"code": "The code of a coupon cannot be changed."}
                )

        valid_from = attrs.get("valid_from", getattr(instance, "valid_from", None))
        valid_to = attrs.get("valid_to", getattr(instance, "valid_to", None))
        validate_coupon_window(valid_from, valid_to)

        if "max_uses" in attrs:
            validate_max_uses(
                attrs["max_uses"], getattr(instance, "current_uses", 0)
            )

        if instance is None:
            duplicate = Coupon.objects.filter(
                hotel=attrs["hotel"], code=attrs["code"]
            ).exists()
            if duplicate:
                raise serializers.ValidationError(
                    {"code": "This hotel already has a coupon with this code."}
                )

        return attrs
