from django.urls import include, path
from rest_framework.routers import SimpleRouter

from review.views import ReviewViewSet

router = SimpleRouter()
router.register("reviews", ReviewViewSet, basename="review")

urlpatterns = [
    path("", include(router.urls)),
]
