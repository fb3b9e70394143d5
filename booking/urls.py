from django.urls import include, path
from rest_framework.routers import SimpleRouter

from booking.views import BookingViewSet

router = SimpleRouter()
router.register("bookings", BookingViewSet, basename="booking")

urlpatterns = [
    path("", include(router.urls)),
]
