from django.urls import include, path
from rest_framework.routers import SimpleRouter

from coupon.views import CouponViewSet

router = SimpleRouter()
router.register("coupons", CouponViewSet, basename="coupon")

urlpatterns = [
    path("", include(router.urls)),
]
