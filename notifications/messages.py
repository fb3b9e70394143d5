from booking.models import Booking
from payment.models import Payment


def _guest_label(booking: Booking) -> str:
    return booking.guest.email or booking.guest.get_username()


def generate_booking_creation_message(instance: Booking) -> str:
    message = (
        "🆕 New booking created\n"
        f"Guest: {_guest_label(instance)}\n"
        f"Hotel: {instance.hotel.name}\n"
        f"Check-in: {instance.check_in_date}\n"
        f"Check-out: {instance.check_out_date}\n"
        f"Guests: {instance.guests}\n"
        f"Total: {instance.total_price}"
    )
    if instance.applied_coupon_code:
        message += (
            f"\nCoupon: {instance.applied_coupon_code} "
            f"(-{instance.coupon_discount_percentage}%)"
        )
    return message


def generate_booking_confirmation_message(instance: Booking) -> str:
    message = (
        "✅ Booking confirmed\n"
        f"Booking ID: {instance.id}\n"
        f"Hotel: {instance.hotel.name}\n"
        f"Dates: {instance.check_in_date} - {instance.check_out_date}\n"
        f"Confirmed by: {instance.confirmed_by}"
    )
    return message


def generate_booking_cancellation_message(instance: Booking) -> str:
    message = (
        "❌ Booking Canceled\n"
        f"Guest: {_guest_label(instance)}\n"
        f"Hotel: {instance.hotel.name}\n"
        f"Dates: {instance.check_in_date} - {instance.check_out_date}\n"
        f"Cancelled by: {instance.cancelled_by}"
    )
    if instance.cancellation_reason:
        message += f"\nReason: {instance.cancellation_reason}"
    return message


def generate_booking_reschedule_message(instance: Booking) -> str:
    message = (
        "🔁 Booking rescheduled\n"
        f"Booking ID: {instance.id}\n"
        f"Hotel: {instance.hotel.name}\n"
        f"New dates: {instance.check_in_date} - {instance.check_out_date}\n"
        f"Nights: {instance.nights}\n"
        f"New total: {instance.total_price}"
    )
    return message


def generate_success_payment_message(booking: Booking, payment: Payment) -> str:
    message = (
        f"✅ Payment Successful\n"
        f"Booking ID: {booking.id}\n"
        f"Guest: {_guest_label(booking)}\n"
        f"Hotel: {booking.hotel.name}\n"
        f"Check-in: {booking.check_in_date}\n"
        f"Check-out: {booking.check_out_date}\n"
        f"Amount Paid: {payment.money_to_pay}"
    )
    return message
