"""
Booking lifecycle operations.

Every function here is one unit of work: it runs inside a single
``transaction.atomic()`` block and locks the rows it depends on, so the
availability check, coupon usage and booking write commit or roll back
together.
"""

import logging

from django.db import transaction
from django.db.models import F
from django.utils import timezone
from rest_framework.exceptions import NotFound

from booking.availability import ensure_available, evaluate, overlapping_active_bookings
from booking.models import Booking
from booking.pricing import Pricing, compute
from booking.state_machine import RESCHEDULABLE_STATUSES, transition
from booking.validators import (
    validate_booking_can_check_in,
    validate_is_booking_guest,
    validate_is_hotel_host,
    validate_reschedule_dates,
)
from common.exceptions import InvalidTransition
from coupon.models import Coupon
from coupon.validators import resolve_coupon
from hotel.models import Hotel

logger = logging.getLogger(__name__)

Status = Booking.BookingStatus
Actor = Booking.Actor


def get_bookable_hotel(hotel_id, lock=False) -> Hotel:
    queryset = Hotel.objects.filter(pk=hotel_id)
    if lock:
        queryset = queryset.select_for_update()
    hotel = queryset.first()

    if hotel is None or not hotel.is_bookable:
        raise NotFound("Hotel not found.")
    return hotel


def _lock_booking(booking) -> Booking:
    return Booking.objects.select_for_update().get(pk=booking.pk)


def _price_stay(hotel, check_in, check_out, guests, coupon_code, today, lock):
    existing = overlapping_active_bookings(hotel, check_in, check_out)
    ensure_available(evaluate(hotel, check_in, check_out, guests, existing, today))

    coupon = resolve_coupon(hotel, coupon_code, today, lock=lock)

    snapshot = compute(
        Pricing.from_hotel(hotel),
        check_in,
        check_out,
        coupon_discount_percentage=coupon.discount_percentage if coupon else None,
        coupon_code=coupon.code if coupon else None,
    )
    return snapshot, coupon


def quote_booking(hotel_id, check_in, check_out, guests, coupon_code=None, today=None):
    """Price a stay without reserving anything or consuming the coupon."""
    today = today or timezone.localdate()
    hotel = get_bookable_hotel(hotel_id)
    return _price_stay(
        hotel, check_in, check_out, guests, coupon_code, today, lock=False
    )


def create_booking(
    guest, hotel_id, check_in, check_out, guests, coupon_code=None, today=None
):
    """
    Create a ``pending`` booking.

    Returns ``(booking, coupon)``; ``coupon`` is ``None`` when no code was
    given. Fails in order: availability, coupon, then commit.
    """
    today = today or timezone.localdate()

    with transaction.atomic():
        hotel = get_bookable_hotel(hotel_id, lock=True)
        snapshot, coupon = _price_stay(
            hotel, check_in, check_out, guests, coupon_code, today, lock=True
        )

        booking = Booking(
            hotel=hotel,
            guest=guest,
            check_in_date=check_in,
            check_out_date=check_out,
            guests=guests,
            status=Status.PENDING,
            coupon=coupon,
        )
        booking.apply_price_snapshot(snapshot)
        booking.save()

        if coupon is not None:
            Coupon.objects.filter(pk=coupon.pk).update(
                current_uses=F("current_uses") + 1
            )
            coupon.refresh_from_db(fields=["current_uses"])

    logger.info(
        f"Booking {booking.id} created for hotel {hotel.id}: "
        f"{check_in} - {check_out}, total {snapshot.total_price}"
    )
    return booking, coupon


def reschedule_booking(booking, guest, check_in, check_out, today=None) -> Booking:
    """
    Move a pending or confirmed booking to new dates.

    The booking keeps its status, its nightly rate and fees, and the coupon
    percentage it was granted; the coupon is not re-validated or re-counted.
    """
    today = today or timezone.localdate()

    with transaction.atomic():
        booking = _lock_booking(booking)
        validate_is_booking_guest(booking, guest)

        if booking.status not in RESCHEDULABLE_STATUSES:
            raise InvalidTransition(
                "Only pending or confirmed bookings can be rescheduled."
            )

        validate_reschedule_dates(check_in, check_out, today)

        hotel = Hotel.objects.select_for_update().get(pk=booking.hotel_id)
        existing = overlapping_active_bookings(
            hotel, check_in, check_out, exclude=booking
        )
        ensure_available(
            evaluate(hotel, check_in, check_out, booking.guests, existing, today)
        )

        snapshot = compute(
            booking.snapshot_pricing,
            check_in,
            check_out,
            coupon_discount_percentage=booking.coupon_discount_percentage,
            coupon_code=booking.applied_coupon_code,
        )

        booking.check_in_date = check_in
        booking.check_out_date = check_out
        booking.apply_price_snapshot(snapshot)
        booking.save(
            update_fields=[
                "check_in_date",
                "check_out_date",
                *Booking.SNAPSHOT_FIELDS,
                "applied_coupon_code",
                "updated_at",
            ]
        )

    logger.info(
        f"Booking {booking.id} rescheduled to {check_in} - {check_out}, "
        f"total {snapshot.total_price}"
    )
    return booking


def _save_transition(booking, changed, *extra_fields):
    if changed:
        booking.save(update_fields=[*changed, *extra_fields, "updated_at"])
        logger.info(f"Booking {booking.id} moved to {booking.status}")
    return booking


def confirm_booking(booking, host) -> Booking:
    with transaction.atomic():
        booking = _lock_booking(booking)
        validate_is_hotel_host(booking.hotel, host)

        changed = transition(booking, Status.CONFIRMED, Actor.HOST)
        if changed:
            booking.confirmed_by = Actor.HOST
        return _save_transition(booking, changed, "confirmed_by")


def confirm_paid_booking(booking) -> Booking:
    """Confirm a pending booking after a successful payment."""
    with transaction.atomic():
        booking = _lock_booking(booking)

        changed = transition(booking, Status.CONFIRMED, Actor.PAYMENT)
        if changed:
            booking.confirmed_by = Actor.PAYMENT
        return _save_transition(booking, changed, "confirmed_by")


def _cancel(booking, actor, reason):
    changed = transition(booking, Status.CANCELLED, actor)
    if changed:
        booking.cancelled_by = actor
        booking.cancellation_reason = reason or ""
        booking.refund_amount = booking.total_price
    return _save_transition(
        booking, changed, "cancelled_by", "cancellation_reason", "refund_amount"
    )


def reject_booking(booking, host, reason="") -> Booking:
    with transaction.atomic():
        booking = _lock_booking(booking)
        validate_is_hotel_host(booking.hotel, host)
        return _cancel(booking, Actor.HOST, reason)


def cancel_booking(booking, guest, reason="") -> Booking:
    with transaction.atomic():
        booking = _lock_booking(booking)
        validate_is_booking_guest(booking, guest)
        return _cancel(booking, Actor.GUEST, reason)


def check_in_booking(booking, host, today=None) -> Booking:
    with transaction.atomic():
        booking = _lock_booking(booking)
        validate_is_hotel_host(booking.hotel, host)
        validate_booking_can_check_in(booking, today)

        changed = transition(booking, Status.CHECKED_IN, Actor.HOST)
        return _save_transition(booking, changed)


def check_out_booking(booking, host) -> Booking:
    with transaction.atomic():
        booking = _lock_booking(booking)
        validate_is_hotel_host(booking.hotel, host)

        changed = transition(booking, Status.CHECKED_OUT, Actor.HOST)
        return _save_transition(booking, changed)


def complete_booking(booking) -> Booking:
    with transaction.atomic():
        booking = _lock_booking(booking)
        changed = transition(booking, Status.COMPLETED, Actor.SYSTEM)
        return _save_transition(booking, changed)


def complete_checked_out_bookings() -> int:
    """Mark every checked-out booking as completed."""
    completed = 0
    for booking in Booking.objects.filter(status=Status.CHECKED_OUT).only("pk"):
        complete_booking(booking)
        completed += 1
    return completed
