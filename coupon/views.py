from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.viewsets import ModelViewSet
from rest_framework_simplejwt.authentication import JWTAuthentication

from coupon.models import Coupon
from coupon.serializers import CouponSerializer


@extend_schema(tags=["Coupons"])
class CouponViewSet(ModelViewSet):
    """
    ViewSet for managing coupons of the user's hotels.

    Coupons of other hosts are not visible.
    """

    serializer_class = CouponSerializer
    authentication_classes = (JWTAuthentication,)
    permission_classes = [IsAuthenticated]
    filterset_fields = ("hotel",)

    def get_queryset(self):
        return Coupon.objects.select_related("hotel").filter(
            hotel__owner=self.request.user
        )
