from django.utils import timezone

from booking.models import Booking
from common.exceptions import InvalidDateRange, InvalidTransition, Unauthorized


def validate_is_booking_guest(booking, user):
    """Validate that ``user`` is the guest who made the booking."""
    if booking.guest_id != user.pk:
        raise Unauthorized("Only the guest who made this booking can do this.")


def validate_is_hotel_host(hotel, user):
    """Validate that ``user`` owns the hotel."""
    if hotel.owner_id != user.pk:
        raise Unauthorized("Only the host of this hotel can do this.")


def validate_reschedule_dates(check_in, check_out, today=None):
    """
    Validate the new range of a reschedule request.
    """
    today = today or timezone.localdate()

    if check_in >= check_out:
        raise InvalidDateRange("Check-out date must be after check-in date.")

    if check_in < today:
        raise InvalidDateRange("Check-in date cannot be in the past.")


def validate_booking_can_check_in(booking, today=None):
    """Validate that the stay is under way. Already checked-in bookings pass."""
    if booking.status == Booking.BookingStatus.CHECKED_IN:
        return

    today = today or timezone.localdate()

    if today < booking.check_in_date:
        raise InvalidTransition("Too early to check in.")

    if today >= booking.check_out_date:
        raise InvalidTransition("Check-in is not possible after check-out date.")
