from django.db.models import Q
from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiResponse,
    OpenApiTypes,
    extend_schema,
    inline_serializer,
)
from rest_framework import mixins, serializers, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.authentication import JWTAuthentication

from booking import services
from booking.filters import BookingFilter
from booking.models import Booking
from booking.serializers import (
    AppliedCouponSerializer,
    BookingCreateSerializer,
    BookingQuoteSerializer,
    BookingReadSerializer,
    BookingReasonSerializer,
    BookingRescheduleSerializer,
    PriceSnapshotSerializer,
)

TRANSITION_ERRORS = {
    401: OpenApiResponse(
        description="Authentication credentials were not provided or are invalid"
    ),
    403: OpenApiResponse(description="User is not allowed to perform this action"),
    404: OpenApiResponse(description="Booking not found"),
    409: OpenApiResponse(description="Transition not allowed from the current status"),
}


class BookingViewSet(
    mixins.CreateModelMixin,
    viewsets.ReadOnlyModelViewSet,
):
    """
    ViewSet for managing hotel bookings.
    Provides creation and read access with role-based visibility,
    filtering capabilities, and custom actions for the booking lifecycle.
    """

    serializer_class = BookingReadSerializer
    authentication_classes = (JWTAuthentication,)
    permission_classes = [IsAuthenticated]
    filterset_class = BookingFilter

    def get_queryset(self):
        """
        Get queryset of bookings based on user permissions.

        Lists show the user's own stays; single bookings are also visible
        to the host of the hotel.
        """
        queryset = Booking.objects.select_related("hotel", "guest")
        user = self.request.user

        if user.is_staff:
            return queryset

        if self.action == "list":
            return queryset.filter(guest=user)

        return queryset.filter(Q(guest=user) | Q(hotel__owner=user))

    def get_serializer_class(self):
        """Return appropriate serializer class based on action."""
        if self.action == "create":
            return BookingCreateSerializer
        if self.action == "quote":
            return BookingQuoteSerializer
        if self.action == "reschedule":
            return BookingRescheduleSerializer
        if self.action in ("cancel", "reject"):
            return BookingReasonSerializer
        return BookingReadSerializer

    def _respond(self, booking):
        return Response(BookingReadSerializer(booking).data, status=status.HTTP_200_OK)

    @extend_schema(
        request=BookingCreateSerializer,
        responses={
            201: inline_serializer(
                name="BookingCreated",
                fields={
                    "booking": BookingReadSerializer(),
                    "applied_coupon": AppliedCouponSerializer(allow_null=True),
                },
            ),
            400: OpenApiResponse(description="Validation or coupon error"),
            404: OpenApiResponse(description="Hotel not found"),
            409: OpenApiResponse(description="Hotel not available for these dates"),
        },
        summary="Create booking",
        description=(
            "Create a pending booking. The price is computed once and stored "
            "on the booking; a coupon code consumes one use of the coupon."
        ),
    )
    def create(self, request, *args, **kwargs):
        """
        Create a new booking for the authenticated guest.
        """
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        booking, coupon = services.create_booking(
            guest=request.user,
            hotel_id=data["hotel"],
            check_in=data["check_in_date"],
            check_out=data["check_out_date"],
            guests=data["guests"],
            coupon_code=data.get("coupon_code"),
        )

        return Response(
            {
                "booking": BookingReadSerializer(booking).data,
                "applied_coupon": (
                    AppliedCouponSerializer(coupon).data if coupon else None
                ),
            },
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(
        summary="List bookings",
        description=(
            "Retrieve a list of bookings.\n\n"
            "- Regular users see only their own bookings.\n"
            "- Staff users see all bookings.\n"
            "- Supports filtering by guest, hotel, status and date range."
        ),
        parameters=[
            OpenApiParameter(
                name="guest",
                type=OpenApiTypes.INT,
                location=OpenApiParameter.QUERY,
                description="Filter by guest ID (staff only)",
                required=False,
            ),
            OpenApiParameter(
                name="hotel",
                type=OpenApiTypes.INT,
                location=OpenApiParameter.QUERY,
                description="Filter by hotel ID",
                required=False,
            ),
            OpenApiParameter(
                name="status",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                description=(
                    "Booking status (pending, confirmed, checked-in, "
                    "checked-out, completed, cancelled)"
                ),
                required=False,
            ),
            OpenApiParameter(
                name="from_date",
                type=OpenApiTypes.DATE,
                location=OpenApiParameter.QUERY,
                description="Filter bookings with check-in date from this date",
                required=False,
            ),
            OpenApiParameter(
                name="to_date",
                type=OpenApiTypes.DATE,
                location=OpenApiParameter.QUERY,
                description="Filter bookings with check-out date to this date",
                required=False,
            ),
        ],
    )
    def list(self, request, *args, **kwargs):
        """List bookings with optional filtering."""
        return super().list(request, *args, **kwargs)

    @extend_schema(
        summary="Retrieve booking",
        description="Retrieve a booking. Visible to its guest and to the hotel host.",
        responses={
            200: BookingReadSerializer,
            404: OpenApiResponse(
                description="Booking not found or user doesn't have permission to view it"
            ),
        },
    )
    def retrieve(self, request, *args, **kwargs):
        return super().retrieve(request, *args, **kwargs)

    @extend_schema(
        request=BookingQuoteSerializer,
        summary="Quote a stay",
        description=(
            "Check availability and price a stay without booking it. "
            "A coupon code is validated but not consumed."
        ),
        responses={
            200: inline_serializer(
                name="BookingQuote",
                fields={
                    "available": serializers.BooleanField(),
                    "price_snapshot": PriceSnapshotSerializer(),
                },
            ),
            400: OpenApiResponse(description="Validation or coupon error"),
            404: OpenApiResponse(description="Hotel not found"),
            409: OpenApiResponse(description="Hotel not available for these dates"),
        },
    )
    @action(detail=False, methods=["post"], url_path="quote", filter_backends=[])
    def quote(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        snapshot, _ = services.quote_booking(
            hotel_id=data["hotel"],
            check_in=data["check_in_date"],
            check_out=data["check_out_date"],
            guests=data["guests"],
            coupon_code=data.get("coupon_code"),
        )
        return Response(
            {
                "available": True,
                "price_snapshot": PriceSnapshotSerializer(snapshot).data,
            },
            status=status.HTTP_200_OK,
        )

    @extend_schema(
        request=BookingRescheduleSerializer,
        summary="Reschedule",
        description=(
            "Move a pending or confirmed booking to new dates. The original "
            "rates and coupon percentage are kept."
        ),
        responses={
            200: BookingReadSerializer,
            400: OpenApiResponse(description="Invalid date range"),
            **TRANSITION_ERRORS,
        },
    )
    @action(detail=True, methods=["post"], url_path="reschedule")
    def reschedule(self, request, pk=None):
        booking = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        booking = services.reschedule_booking(
            booking,
            request.user,
            serializer.validated_data["check_in_date"],
            serializer.validated_data["check_out_date"],
        )
        return self._respond(booking)

    @extend_schema(
        request=BookingReasonSerializer,
        summary="Cancel",
        description="Cancel a pending or confirmed booking (guest).",
        responses={200: BookingReadSerializer, **TRANSITION_ERRORS},
    )
    @action(detail=True, methods=["post"], url_path="cancel")
    def cancel(self, request, pk=None):
        booking = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        booking = services.cancel_booking(
            booking, request.user, serializer.validated_data["reason"]
        )
        return self._respond(booking)

    @extend_schema(
        request=None,
        summary="Confirm",
        description="Confirm a pending booking (host).",
        responses={200: BookingReadSerializer, **TRANSITION_ERRORS},
    )
    @action(detail=True, methods=["post"], url_path="confirm")
    def confirm(self, request, pk=None):
        booking = services.confirm_booking(self.get_object(), request.user)
        return self._respond(booking)

    @extend_schema(
        request=BookingReasonSerializer,
        summary="Reject",
        description="Reject a pending booking (host).",
        responses={200: BookingReadSerializer, **TRANSITION_ERRORS},
    )
    @action(detail=True, methods=["post"], url_path="reject")
    def reject(self, request, pk=None):
        booking = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        booking = services.reject_booking(
            booking, request.user, serializer.validated_data["reason"]
        )
        return self._respond(booking)

    @extend_schema(
        request=None,
        summary="Check in",
        description="Check the guest in on a confirmed booking (host).",
        responses={200: BookingReadSerializer, **TRANSITION_ERRORS},
    )
    @action(detail=True, methods=["post"], url_path="check-in")
    def check_in(self, request, pk=None):
        booking = services.check_in_booking(self.get_object(), request.user)
        return self._respond(booking)

    @extend_schema(
        request=None,
        summary="Check out",
        description="Check the guest out (host).",
        responses={200: BookingReadSerializer, **TRANSITION_ERRORS},
    )
    @action(detail=True, methods=["post"], url_path="check-out")
    def check_out(self, request, pk=None):
        booking = services.check_out_booking(self.get_object(), request.user)
        return self._respond(booking)
