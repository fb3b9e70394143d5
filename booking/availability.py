from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from django.utils import timezone

from booking.models import Booking
from booking.state_machine import ACTIVE_STATUSES
from common.exceptions import AvailabilityError


@dataclass(frozen=True)
class Availability:
    available: bool
    reason: str = ""

    def __bool__(self):
        return self.available


def ranges_overlap(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    """Half-open ranges ``[a_start, a_end)`` and ``[b_start, b_end)`` share a night."""
    return a_start < b_end and b_start < a_end


def overlapping_active_bookings(hotel, check_in, check_out, exclude=None):
    """Active bookings of ``hotel`` that share at least one night with the range."""
    queryset = Booking.objects.filter(
        hotel=hotel,
        status__in=ACTIVE_STATUSES,
        check_in_date__lt=check_out,
        check_out_date__gt=check_in,
    )
    if exclude is not None:
        queryset = queryset.exclude(pk=exclude.pk)
    return queryset


def evaluate(
    hotel,
    check_in: date,
    check_out: date,
    guests: int,
    existing_bookings: Iterable[Booking],
    today: Optional[date] = None,
) -> Availability:
    """
    Decide whether ``hotel`` can take one more booking for the range.

    Pure query: nothing is reserved. Callers that commit a booking must run
    it again inside the same transaction that writes the booking.
    """
    today = today or timezone.localdate()

    if guests > hotel.max_guests:
        return Availability(
            False, f"This hotel can only accommodate {hotel.max_guests} guests."
        )

    if check_out <= check_in:
        return Availability(False, "Check-out date must be after check-in date.")

    if check_in < today:
        return Availability(False, "Check-in date cannot be in the past.")

    overlapping = sum(
        1
        for booking in existing_bookings
        if booking.status in ACTIVE_STATUSES
        and ranges_overlap(
            booking.check_in_date, booking.check_out_date, check_in, check_out
        )
    )
    if overlapping + 1 > hotel.total_rooms:
        return Availability(
            False,
            f"The hotel is fully booked for the selected dates. "
            f"Only {hotel.total_rooms} room(s) available.",
        )

    return Availability(True)


def ensure_available(availability: Availability) -> None:
    if not availability:
        raise AvailabilityError(availability.reason)
