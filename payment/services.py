import logging
import uuid

from django.db import transaction

from booking.models import Booking
from booking.services import confirm_paid_booking
from booking.validators import validate_is_booking_guest
from payment.models import Payment

logger = logging.getLogger(__name__)


def _reference():
    return f"sim_{uuid.uuid4().hex[:24]}"


def process_simulated_payment(booking, guest, success=True, provider_ref=None):
    """
    Record the outcome of a simulated payment for ``booking``.

    Returns ``(payment, created)``. A successful payment confirms a pending
    booking on behalf of the payment actor. Repeating it for a booking that
    is already paid returns the existing payment instead of charging again.
    A failed payment is recorded and the booking is not touched.
    """
    with transaction.atomic():
        booking = Booking.objects.select_for_update().get(pk=booking.pk)
        validate_is_booking_guest(booking, guest)

        if not success:
            payment = Payment.objects.create(
                booking=booking,
                status=Payment.PaymentStatus.FAILED,
                money_to_pay=booking.total_price,
                provider_ref=provider_ref or _reference(),
            )
            logger.warning(f"Payment {payment.id} for Booking {booking.id} failed.")
            return payment, True

        paid = booking.payments.filter(status=Payment.PaymentStatus.PAID).first()
        if paid is not None and booking.status == Booking.BookingStatus.CONFIRMED:
            logger.info(f"Booking {booking.id} is already paid by Payment {paid.id}.")
            return paid, False

        booking = confirm_paid_booking(booking)

        payment = Payment.objects.create(
            booking=booking,
            status=Payment.PaymentStatus.PAID,
            money_to_pay=booking.total_price,
            provider_ref=provider_ref or _reference(),
        )

    return payment, True
