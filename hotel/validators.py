from datetime import timedelta

from rest_framework.exceptions import ValidationError

from booking.models import Booking
from booking.state_machine import ACTIVE_STATUSES

MAX_CALENDAR_DAYS = 366


def validate_date_range_provided(date_from, date_to):
    """
    Validate that both date_from and date_to are provided.
    """
    if not date_from or not date_to:
        raise ValidationError("date_from and date_to are required")


def validate_date_format(date_from, date_to):
    """
    Validate that dates are in valid format.
    """
    if not date_from or not date_to:
        raise ValidationError("Invalid date format. Use YYYY-MM-DD.")


def validate_date_range_order(date_from, date_to):
    """
    Validate that date_from is before date_to.
    """
    if date_from > date_to:
        raise ValidationError("date_from must be before date_to")


def validate_date_range_length(date_from, date_to):
    if date_to - date_from >= timedelta(days=MAX_CALENDAR_DAYS):
        raise ValidationError(
            f"The calendar covers at most {MAX_CALENDAR_DAYS} days."
        )


def validate_calendar_request(date_from_str, date_to_str, date_from, date_to):
    """
    Comprehensive validation for calendar request.
    """
    validate_date_range_provided(date_from_str, date_to_str)
    validate_date_format(date_from, date_to)
    validate_date_range_order(date_from, date_to)
    validate_date_range_length(date_from, date_to)


def validate_pricing_unlocked(hotel, attrs):
    """
    Validate that pricing is not changed while the hotel has active bookings.
    """
    changed = [
        field
        for field in hotel.PRICING_FIELDS
        if field in attrs and attrs[field] != getattr(hotel, field)
    ]
    if not changed:
        return

    has_active_bookings = Booking.objects.filter(
        hotel=hotel, status__in=ACTIVE_STATUSES
    ).exists()
    if has_active_bookings:
        raise ValidationError(
            {
                field: "Pricing cannot change while the hotel has active bookings."
                for field in changed
            }
        )
