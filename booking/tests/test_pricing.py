from datetime import date
from decimal import Decimal

from django.test import SimpleTestCase

from booking.pricing import Pricing, compute, count_nights

PRICING = Pricing(
    base_price_per_night=Decimal("100.00"),
    cleaning_fee=Decimal("20.00"),
    service_fee=Decimal("10.00"),
)


class ComputeTests(SimpleTestCase):
    def test_three_nights_with_ten_percent_coupon(self):
        snapshot = compute(
            PRICING,
            date(2024, 3, 1),
            date(2024, 3, 4),
            coupon_discount_percentage=Decimal("10"),
            coupon_code="SAVE10",
        )

        self.assertEqual(snapshot.nights, 3)
        self.assertEqual(snapshot.base_price_total, Decimal("300.00"))
        self.assertEqual(snapshot.subtotal, Decimal("330.00"))
        self.assertEqual(snapshot.discounts, Decimal("33.00"))
        self.assertEqual(snapshot.total_price, Decimal("297.00"))
        self.assertEqual(snapshot.coupon_code, "SAVE10")

    def test_without_coupon(self):
        snapshot = compute(PRICING, date(2024, 3, 1), date(2024, 3, 4))

        self.assertEqual(snapshot.discounts, Decimal("0.00"))
        self.assertEqual(snapshot.total_price, Decimal("330.00"))
        self.assertIsNone(snapshot.coupon_code)
        self.assertIsNone(snapshot.coupon_discount_percentage)

    def test_code_is_dropped_without_percentage(self):
        snapshot = compute(
            PRICING, date(2024, 3, 1), date(2024, 3, 2), coupon_code="SAVE10"
        )
        self.assertIsNone(snapshot.coupon_code)

    def test_discount_rounds_half_up(self):
        snapshot = compute(
            Pricing(base_price_per_night=Decimal("33.33")),
            date(2024, 3, 1),
            date(2024, 3, 2),
            coupon_discount_percentage=Decimal("15"),
        )

        self.assertEqual(snapshot.discounts, Decimal("5.00"))
        self.assertEqual(snapshot.total_price, Decimal("28.33"))

    def test_full_discount_is_free_not_negative(self):
        snapshot = compute(
            PRICING,
            date(2024, 3, 1),
            date(2024, 3, 3),
            coupon_discount_percentage=Decimal("100"),
        )
        self.assertEqual(snapshot.total_price, Decimal("0.00"))

    def test_is_deterministic(self):
        args = (PRICING, date(2024, 5, 10), date(2024, 5, 17))
        kwargs = {"coupon_discount_percentage": Decimal("12.5"), "coupon_code": "X12"}

        self.assertEqual(compute(*args, **kwargs), compute(*args, **kwargs))

    def test_accepts_plain_numbers(self):
        snapshot = compute(
            Pricing(base_price_per_night=80, cleaning_fee=5, service_fee=0.5),
            date(2024, 1, 1),
            date(2024, 1, 3),
        )
        self.assertEqual(snapshot.total_price, Decimal("165.50"))


class CountNightsTests(SimpleTestCase):
    def test_calendar_day_difference(self):
        self.assertEqual(count_nights(date(2024, 2, 27), date(2024, 3, 2)), 4)

    def test_floor_of_one(self):
        self.assertEqual(count_nights(date(2024, 3, 1), date(2024, 3, 1)), 1)
