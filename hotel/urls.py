from django.urls import include, path
from rest_framework.routers import SimpleRouter

from hotel.views import HotelViewSet

router = SimpleRouter()
router.register("hotels", HotelViewSet, basename="hotel")

urlpatterns = [
    path("", include(router.urls)),
]
