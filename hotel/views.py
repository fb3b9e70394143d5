from datetime import timedelta

from django.db.models import Q
from django.utils.dateparse import parse_date
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import mixins
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from booking.availability import overlapping_active_bookings
from booking.serializers import BookingReadSerializer
from booking.validators import validate_is_hotel_host
from hotel.models import Hotel
from hotel.permissions import IsHotelOwnerOrReadOnly
from hotel.serializers import HotelCalendarSerializer, HotelSerializer
from hotel.validators import validate_calendar_request, validate_pricing_unlocked


@extend_schema(tags=["Hotels"])
class HotelViewSet(
    mixins.CreateModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    mixins.ListModelMixin,
    GenericViewSet,
):
    """
    ViewSet for managing hotels.

    Supports listing, retrieving, creating, updating hotels,
    the bookings of a hotel for its host
    and the hotel availability calendar.
    """

    serializer_class = HotelSerializer
    permission_classes = (IsAuthenticated, IsHotelOwnerOrReadOnly)
    filterset_fields = ("max_guests", "total_rooms")

    def get_queryset(self):
        """Approved, non-suspended hotels plus the user's own listings."""
        queryset = Hotel.objects.all().order_by("id")
        user = self.request.user

        if user.is_staff:
            return queryset

        return queryset.filter(
            Q(is_approved=True, is_suspended=False) | Q(owner=user)
        )

    def get_serializer_class(self):
        """Return serializer class depending on the current action."""

        if self.action == "calendar":
            return HotelCalendarSerializer
        if self.action == "bookings":
            return BookingReadSerializer
        return HotelSerializer

    def perform_create(self, serializer):
        serializer.save(owner=self.request.user)

    def perform_update(self, serializer):
        validate_pricing_unlocked(serializer.instance, serializer.validated_data)
        serializer.save()

    @extend_schema(
        request=None,
        responses={200: BookingReadSerializer(many=True)},
        description="List every booking of the hotel. Only the host may do this.",
    )
    @action(methods=["GET"], detail=True, url_path="bookings", filter_backends=[])
    def bookings(self, request, pk=None):
        hotel = self.get_object()
        validate_is_hotel_host(hotel, request.user)

        bookings = hotel.bookings.select_related("hotel", "guest").order_by(
            "check_in_date", "id"
        )
        page = self.paginate_queryset(bookings)
        if page is not None:
            serializer = BookingReadSerializer(page, many=True)
            return self.get_paginated_response(serializer.data)

        serializer = BookingReadSerializer(bookings, many=True)
        return Response(serializer.data)

    @extend_schema(
        request=None,
        parameters=[
            OpenApiParameter(
                name="date_from",
                type=OpenApiTypes.DATE,
                location=OpenApiParameter.QUERY,
                description="Start date (YYYY-MM-DD)",
                required=True,
            ),
            OpenApiParameter(
                name="date_to",
                type=OpenApiTypes.DATE,
                location=OpenApiParameter.QUERY,
                description="End date (YYYY-MM-DD)",
                required=True,
            ),
        ],
        responses={
            200: HotelCalendarSerializer(many=True),
            400: {
                "description": "Bad Request",
                "examples": [
                    {"detail": "date_from and date_to are required"},
                    {"detail": "date_from must be before date_to"},
                ],
            },
        },
        description=(
            "Get hotel availability calendar for a given date range.\n\n"
            "Pending, confirmed and checked-in bookings occupy a room for every "
            "night of their stay. The calendar is a hint; availability is "
            "checked again when a booking is made."
        ),
    )
    @action(methods=["GET"], detail=True, url_path="calendar", filter_backends=[])
    def calendar(self, request, pk=None):
        """
        Return hotel availability calendar for a given date range.

        Dates between date_from and date_to (inclusive) are returned
        with the number of rooms left for that night.
        """

        hotel = self.get_object()

        date_from_str = request.query_params.get("date_from")
        date_to_str = request.query_params.get("date_to")

        date_from = parse_date(date_from_str) if date_from_str else None
        date_to = parse_date(date_to_str) if date_to_str else None

        validate_calendar_request(date_from_str, date_to_str, date_from, date_to)

        bookings = overlapping_active_bookings(
            hotel, date_from, date_to + timedelta(days=1)
        )

        occupied = {}
        for booking in bookings:
            current = max(booking.check_in_date, date_from)
            while current < booking.check_out_date and current <= date_to:
                occupied[current] = occupied.get(current, 0) + 1
                current += timedelta(days=1)

        calendar = []
        current_date = date_from
        while current_date <= date_to:
            rooms_left = max(0, hotel.total_rooms - occupied.get(current_date, 0))
            calendar.append(
                {
                    "date": current_date,
                    "rooms_left": rooms_left,
                    "available": rooms_left > 0,
                }
            )
            current_date += timedelta(days=1)

        serializer = HotelCalendarSerializer(calendar, many=True)
        return Response(serializer.data)
