import random
from datetime import date, timedelta
from decimal import Decimal

from django.test import TestCase
from rest_framework.exceptions import NotFound

from booking import services
from booking.availability import overlapping_active_bookings
from booking.models import Booking
from booking.tests.helpers import future, make_booking, make_coupon, make_hotel, make_user
from common.exceptions import (
    AvailabilityError,
    CouponExhausted,
    CouponExpired,
    CouponNotFound,
    InvalidDateRange,
    InvalidTransition,
    Unauthorized,
)

Status = Booking.BookingStatus
Actor = Booking.Actor


class CreateBookingTests(TestCase):
    def setUp(self):
        self.host = make_user("host")
        self.guest = make_user("guest")
        self.hotel = make_hotel(self.host)

    def test_creates_pending_booking_with_snapshot(self):
        booking, coupon = services.create_booking(
            self.guest, self.hotel.id, future(10), future(13), 2
        )

        booking.refresh_from_db()
        self.assertIsNone(coupon)
        self.assertEqual(booking.status, Status.PENDING)
        self.assertEqual(booking.nights, 3)
        self.assertEqual(booking.subtotal, Decimal("330.00"))
        self.assertEqual(booking.discounts, Decimal("0.00"))
        self.assertEqual(booking.total_price, Decimal("330.00"))
        self.assertIsNone(booking.applied_coupon_code)

    def test_coupon_discount_and_usage(self):
        make_coupon(self.hotel, "SAVE10")

        booking, coupon = services.create_booking(
            self.guest, self.hotel.id, future(10), future(13), 1, coupon_code="save10"
        )

        self.assertEqual(booking.discounts, Decimal("33.00"))
        self.assertEqual(booking.total_price, Decimal("297.00"))
        self.assertEqual(booking.applied_coupon_code, "SAVE10")
        self.assertEqual(booking.coupon_id, coupon.id)
        self.assertEqual(coupon.current_uses, 1)

    def test_snapshot_is_not_affected_by_later_price_changes(self):
        booking, _ = services.create_booking(
            self.guest, self.hotel.id, future(10), future(13), 1
        )
        self.hotel.base_price_per_night = Decimal("500.00")
        self.hotel.save()

        booking.refresh_from_db()
        self.assertEqual(booking.total_price, Decimal("330.00"))

    def test_second_overlapping_booking_is_rejected(self):
        services.create_booking(self.guest, self.hotel.id, future(10), future(13), 1)

        with self.assertRaises(AvailabilityError):
            services.create_booking(
                make_user("other"), self.hotel.id, future(12), future(14), 1
            )
        self.assertEqual(Booking.objects.count(), 1)

    def test_cancelled_booking_frees_the_room(self):
        make_booking(self.hotel, self.guest, future(10), future(13), Status.CANCELLED)

        booking, _ = services.create_booking(
            self.guest, self.hotel.id, future(10), future(13), 1
        )
        self.assertEqual(booking.status, Status.PENDING)

    def test_too_many_guests(self):
        with self.assertRaises(AvailabilityError):
            services.create_booking(self.guest, self.hotel.id, future(10), future(13), 5)

    def test_hidden_hotels_are_not_found(self):
        unapproved = make_hotel(self.host, is_approved=False)
        suspended = make_hotel(self.host, is_suspended=True)

        for hotel_id in (unapproved.id, suspended.id, 999999):
            with self.subTest(hotel_id=hotel_id):
                with self.assertRaises(NotFound):
                    services.create_booking(
                        self.guest, hotel_id, future(10), future(13), 1
                    )

    def test_unknown_coupon(self):
        other_hotel = make_hotel(self.host, name="Other")
        make_coupon(other_hotel, "SAVE10")

        with self.assertRaises(CouponNotFound):
            services.create_booking(
                self.guest, self.hotel.id, future(10), future(13), 1, "SAVE10"
            )
        self.assertFalse(Booking.objects.exists())

    def test_expired_coupon(self):
        coupon = make_coupon(
            self.hotel,
            valid_from=future(-30),
            valid_to=future(-1),
        )

        with self.assertRaises(CouponExpired):
            services.create_booking(
                self.guest, self.hotel.id, future(10), future(13), 1, "SAVE10"
            )
        coupon.refresh_from_db()
        self.assertEqual(coupon.current_uses, 0)
        self.assertFalse(Booking.objects.exists())

    def test_coupon_with_one_use_is_applied_once(self):
        hotel = make_hotel(self.host, total_rooms=5)
        coupon = make_coupon(hotel, "ONCE", max_uses=1)

        first, _ = services.create_booking(
            self.guest, hotel.id, future(10), future(13), 1, "ONCE"
        )
        with self.assertRaises(CouponExhausted):
            services.create_booking(
                make_user("other"), hotel.id, future(10), future(13), 1, "ONCE"
            )

        coupon.refresh_from_db()
        self.assertEqual(coupon.current_uses, 1)
        self.assertEqual(first.discounts, Decimal("33.00"))
        self.assertEqual(Booking.objects.count(), 1)

    def test_availability_is_checked_before_coupon(self):
        make_booking(self.hotel, self.guest, future(10), future(13))

        with self.assertRaises(AvailabilityError):
            services.create_booking(
                self.guest, self.hotel.id, future(10), future(13), 1, "MISSING"
            )

    def test_random_requests_never_overbook(self):
        hotel = make_hotel(self.host, total_rooms=3)
        rng = random.Random(7)

        for _ in range(60):
            start = rng.randint(1, 20)
            length = rng.randint(1, 5)
            try:
                services.create_booking(
                    self.guest, hotel.id, future(start), future(start + length), 1
                )
            except AvailabilityError:
                pass

        for offset in range(1, 26):
            night = future(offset)
            occupied = overlapping_active_bookings(
                hotel, night, night + timedelta(days=1)
            ).count()
            self.assertLessEqual(occupied, hotel.total_rooms)


class QuoteBookingTests(TestCase):
    def setUp(self):
        self.hotel = make_hotel(make_user("host"))

    def test_quote_does_not_consume_coupon(self):
        coupon = make_coupon(self.hotel, "SAVE10", max_uses=1)

        snapshot, quoted = services.quote_booking(
            self.hotel.id, future(10), future(13), 1, "SAVE10"
        )

        coupon.refresh_from_db()
        self.assertEqual(snapshot.total_price, Decimal("297.00"))
        self.assertEqual(quoted, coupon)
        self.assertEqual(coupon.current_uses, 0)
        self.assertFalse(Booking.objects.exists())


class RescheduleBookingTests(TestCase):
    def setUp(self):
        self.host = make_user("host")
        self.guest = make_user("guest")
        self.hotel = make_hotel(self.host, total_rooms=1)

    def test_expired_coupon_keeps_original_percentage(self):
        coupon = make_coupon(
            self.hotel,
            "WINTER",
            valid_from=date(2024, 1, 1),
            valid_to=date(2024, 1, 31),
        )
        booking, _ = services.create_booking(
            self.guest,
            self.hotel.id,
            date(2024, 3, 1),
            date(2024, 3, 4),
            1,
            "WINTER",
            today=date(2024, 1, 10),
        )
        booking = services.confirm_booking(booking, self.host)

        booking = services.reschedule_booking(
            booking,
            self.guest,
            date(2024, 3, 1),
            date(2024, 3, 6),
            today=date(2024, 2, 15),
        )

        booking.refresh_from_db()
        coupon.refresh_from_db()
        self.assertEqual(booking.status, Status.CONFIRMED)
        self.assertEqual(booking.nights, 5)
        self.assertEqual(booking.subtotal, Decimal("530.00"))
        self.assertEqual(booking.coupon_discount_percentage, Decimal("10.00"))
        self.assertEqual(booking.discounts, Decimal("53.00"))
        self.assertEqual(booking.total_price, Decimal("477.00"))
        self.assertEqual(coupon.current_uses, 1)

    def test_there_and_back_gives_the_same_price(self):
        make_coupon(self.hotel, "SAVE10")
        booking, _ = services.create_booking(
            self.guest, self.hotel.id, future(10), future(13), 1, "SAVE10"
        )
        original = booking.price_snapshot

        services.reschedule_booking(booking, self.guest, future(20), future(25))
        booking = services.reschedule_booking(
            booking, self.guest, future(10), future(13)
        )

        booking.refresh_from_db()
        self.assertEqual(booking.price_snapshot, original)

    def test_uses_the_booked_rates(self):
        booking, _ = services.create_booking(
            self.guest, self.hotel.id, future(10), future(13), 1
        )
        self.hotel.base_price_per_night = Decimal("200.00")
        self.hotel.save()

        booking = services.reschedule_booking(
            booking, self.guest, future(10), future(12)
        )
        self.assertEqual(booking.base_price_per_night, Decimal("100.00"))
        self.assertEqual(booking.total_price, Decimal("230.00"))

    def test_moving_within_own_dates_is_allowed(self):
        booking = make_booking(self.hotel, self.guest, future(10), future(13))

        booking = services.reschedule_booking(
            booking, self.guest, future(11), future(14)
        )
        self.assertEqual(booking.check_in_date, future(11))

    def test_conflict_with_other_booking(self):
        booking = make_booking(self.hotel, self.guest, future(10), future(13))
        make_booking(self.hotel, make_user("other"), future(20), future(22))

        with self.assertRaises(AvailabilityError):
            services.reschedule_booking(booking, self.guest, future(19), future(21))

        booking.refresh_from_db()
        self.assertEqual(booking.check_in_date, future(10))

    def test_invalid_ranges(self):
        booking = make_booking(self.hotel, self.guest, future(10), future(13))

        for check_in, check_out in (
            (future(13), future(10)),
            (future(10), future(10)),
            (future(-1), future(2)),
        ):
            with self.subTest(check_in=check_in, check_out=check_out):
                with self.assertRaises(InvalidDateRange):
                    services.reschedule_booking(
                        booking, self.guest, check_in, check_out
                    )

    def test_only_pending_or_confirmed(self):
        for status in (Status.CHECKED_IN, Status.CANCELLED, Status.COMPLETED):
            booking = make_booking(
                self.hotel, self.guest, future(30), future(31), status
            )
            with self.subTest(status=status):
                with self.assertRaises(InvalidTransition):
                    services.reschedule_booking(
                        booking, self.guest, future(40), future(42)
                    )

    def test_only_the_guest(self):
        booking = make_booking(self.hotel, self.guest, future(10), future(13))

        with self.assertRaises(Unauthorized):
            services.reschedule_booking(booking, self.host, future(20), future(22))


class TransitionServiceTests(TestCase):
    def setUp(self):
        self.host = make_user("host")
        self.guest = make_user("guest")
        self.hotel = make_hotel(self.host)
        self.booking = make_booking(self.hotel, self.guest, future(0), future(3))

    def test_host_confirms(self):
        booking = services.confirm_booking(self.booking, self.host)

        booking.refresh_from_db()
        self.assertEqual(booking.status, Status.CONFIRMED)
        self.assertEqual(booking.confirmed_by, Actor.HOST)
        self.assertIsNotNone(booking.confirmed_at)

    def test_confirm_twice_is_a_no_op(self):
        first = services.confirm_booking(self.booking, self.host)
        second = services.confirm_booking(self.booking, self.host)

        self.assertEqual(second.status, Status.CONFIRMED)
        self.assertEqual(second.confirmed_at, first.confirmed_at)

    def test_guest_cannot_confirm(self):
        with self.assertRaises(Unauthorized):
            services.confirm_booking(self.booking, self.guest)

    def test_paid_booking_is_confirmed_by_payment(self):
        booking = services.confirm_paid_booking(self.booking)
        self.assertEqual(booking.confirmed_by, Actor.PAYMENT)

    def test_guest_cancels(self):
        coupon = make_coupon(self.hotel, "KEEP", max_uses=1, current_uses=1)
        self.booking.coupon = coupon
        self.booking.save()

        booking = services.cancel_booking(self.booking, self.guest, "Plans changed")

        booking.refresh_from_db()
        coupon.refresh_from_db()
        self.assertEqual(booking.status, Status.CANCELLED)
        self.assertEqual(booking.cancelled_by, Actor.GUEST)
        self.assertEqual(booking.cancellation_reason, "Plans changed")
        self.assertEqual(booking.refund_amount, booking.total_price)
        self.assertEqual(coupon.current_uses, 1)

    def test_cancel_twice_is_a_no_op(self):
        services.cancel_booking(self.booking, self.guest, "First")
        booking = services.cancel_booking(self.booking, self.guest, "Second")

        self.assertEqual(booking.cancellation_reason, "First")

    def test_host_rejects_pending_only(self):
        booking = services.reject_booking(self.booking, self.host, "Maintenance")
        self.assertEqual(booking.cancelled_by, Actor.HOST)

        confirmed = make_booking(
            make_hotel(self.host, name="Second"),
            self.guest,
            future(5),
            future(6),
            Status.CONFIRMED,
        )
        with self.assertRaises(InvalidTransition):
            services.reject_booking(confirmed, self.host)

    def test_stay_lifecycle(self):
        services.confirm_booking(self.booking, self.host)
        services.check_in_booking(self.booking, self.host)
        booking = services.check_out_booking(self.booking, self.host)

        self.assertEqual(booking.status, Status.CHECKED_OUT)
        self.assertIsNotNone(booking.checked_in_at)
        self.assertIsNotNone(booking.checked_out_at)

        self.assertEqual(services.complete_checked_out_bookings(), 1)
        booking.refresh_from_db()
        self.assertEqual(booking.status, Status.COMPLETED)
        self.assertIsNotNone(booking.completed_at)

    def test_check_in_outside_the_stay(self):
        services.confirm_booking(self.booking, self.host)

        for today in (future(-1), future(3)):
            with self.subTest(today=today):
                with self.assertRaises(InvalidTransition):
                    services.check_in_booking(self.booking, self.host, today=today)

    def test_pending_booking_cannot_check_in(self):
        with self.assertRaises(InvalidTransition):
            services.check_in_booking(self.booking, self.host)

    def test_check_out_requires_check_in(self):
        services.confirm_booking(self.booking, self.host)

        with self.assertRaises(InvalidTransition):
            services.check_out_booking(self.booking, self.host)
