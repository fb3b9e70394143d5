from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiResponse,
    OpenApiTypes,
    extend_schema,
)
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.authentication import JWTAuthentication

from hotel.models import Hotel
from review import services
from review.models import Review
from review.serializers import (
    HotelQuerySerializer,
    HotelRatingSerializer,
    ReviewCreateSerializer,
    ReviewReplySerializer,
    ReviewSerializer,
)

HOTEL_PARAMETER = OpenApiParameter(
    name="hotel",
    type=OpenApiTypes.INT,
    location=OpenApiParameter.QUERY,
    description="Filter by hotel ID",
    required=False,
)


@extend_schema(tags=["Reviews"])
class ReviewViewSet(
    mixins.CreateModelMixin,
    viewsets.ReadOnlyModelViewSet,
):
    """
    ViewSet for guest reviews of finished stays.

    Reviews of suspended hotels are hidden.
    """

    serializer_class = ReviewSerializer
    authentication_classes = (JWTAuthentication,)
    permission_classes = [IsAuthenticated]
    filterset_fields = ("hotel",)

    def get_queryset(self):
        return Review.objects.select_related("guest", "hotel").filter(
            hotel__is_suspended=False
        )

    def get_serializer_class(self):
        if self.action == "create":
            return ReviewCreateSerializer
        if self.action == "reply":
            return ReviewReplySerializer
        if self.action == "summary":
            return HotelRatingSerializer
        return ReviewSerializer

    @extend_schema(
        summary="Leave a review",
        description=(
            "Rate a checked-out or completed stay from 1 to 5. "
            "Only one review per booking is accepted."
        ),
        request=ReviewCreateSerializer,
        responses={
            201: ReviewSerializer,
            400: OpenApiResponse(description="Stay not finished or already reviewed"),
            404: OpenApiResponse(description="Booking not found"),
        },
    )
    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        review = services.create_review(
            request.user, data["booking"], data["rating"], data["comment"]
        )
        return Response(ReviewSerializer(review).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        summary="List reviews",
        description="Retrieve reviews, newest first.",
        parameters=[HOTEL_PARAMETER],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(
        summary="Reply to a review",
        description="Answer a review of one of the host's hotels.",
        request=ReviewReplySerializer,
        responses={
            200: ReviewSerializer,
            403: OpenApiResponse(
                description="User is not the host or the hotel is suspended"
            ),
            404: OpenApiResponse(description="Review not found"),
        },
    )
    @action(detail=True, methods=["post"], url_path="reply")
    def reply(self, request, pk=None):
        review = self.get_object_for_reply(pk)
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        review = services.reply_to_review(
            review, request.user, serializer.validated_data["text"]
        )
        return Response(ReviewSerializer(review).data, status=status.HTTP_200_OK)

    def get_object_for_reply(self, pk):
        # Suspended hotels are filtered out of the queryset, but replying
        # to them is a permission error rather than a missing review.
        review = Review.objects.select_related("hotel").filter(pk=pk).first()
        if review is None:
            raise NotFound("Review not found.")
        return review

    @extend_schema(
        summary="Hotel rating",
        description="Average rating and review count of a hotel.",
        parameters=[HOTEL_PARAMETER],
        responses={
            200: HotelRatingSerializer,
            404: OpenApiResponse(description="Hotel not found"),
        },
    )
    @action(detail=False, methods=["get"], url_path="summary", filter_backends=[])
    def summary(self, request):
        query = HotelQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        hotel = Hotel.objects.filter(
            pk=query.validated_data["hotel"], is_suspended=False
        ).first()
        if hotel is None:
            raise NotFound("Hotel not found.")
        return Response(HotelRatingSerializer(services.hotel_rating(hotel)).data)
