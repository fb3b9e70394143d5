"""
Payment views module.

This module contains API views responsible for:
- listing payments of the current user,
- recording the outcome of a simulated payment.

No payment gateway is involved; the client reports whether the payment
succeeded and the booking is confirmed accordingly.
"""

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.authentication import JWTAuthentication

from payment.models import Payment
from payment.serializers import PaymentConfirmSerializer, PaymentSerializer
from payment.services import process_simulated_payment


@extend_schema(
    summary="List payments",
    description=(
        "Retrieve payments ordered by newest first.\n\n"
        "- Regular users see payments for their own bookings.\n"
        "- Staff users see all payments."
    ),
    responses={200: PaymentSerializer(many=True)},
)
class PaymentListView(generics.ListAPIView):
    """
    API view for retrieving a list of payments.

    Requires authentication via JWT.
    Returns payments ordered by descending ID.
    """

    serializer_class = PaymentSerializer
    authentication_classes = (JWTAuthentication,)
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        queryset = Payment.objects.select_related("booking").order_by("-id")
        if self.request.user.is_staff:
            return queryset
        return queryset.filter(booking__guest=self.request.user)


class PaymentConfirmView(APIView):
    """
    API view for recording a simulated payment.

    A successful payment confirms a pending booking; a failed one is
    stored with status FAILED and leaves the booking unchanged.
    """

    authentication_classes = (JWTAuthentication,)
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Confirm payment",
        description="Records a simulated payment for one of the user's bookings.",
        request=PaymentConfirmSerializer,
        responses={
            201: PaymentSerializer,
            200: OpenApiResponse(
                response=PaymentSerializer,
                description="Booking was already paid; the existing payment is returned",
            ),
            400: OpenApiResponse(description="Validation error"),
            403: OpenApiResponse(description="Booking belongs to another guest"),
            409: OpenApiResponse(description="Booking cannot be confirmed"),
        },
    )
    def post(self, request):
        serializer = PaymentConfirmSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        payment, created = process_simulated_payment(
            serializer.validated_data["booking"],
            request.user,
            success=serializer.validated_data["success"],
            provider_ref=serializer.validated_data.get("provider_ref"),
        )
        return Response(
            PaymentSerializer(payment).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )
