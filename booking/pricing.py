"""
Price computation for bookings.

Nights are the calendar-day difference between check-out and check-in with
a floor of one. All arithmetic is done in ``Decimal``; only the discount and
the total are rounded to cents, and only once.
"""

from dataclasses import asdict, dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

CENT = Decimal("0.01")
HUNDRED = Decimal("100")


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def count_nights(check_in: date, check_out: date) -> int:
    return max(1, (check_out - check_in).days)


@dataclass(frozen=True)
class Pricing:
    """Nightly rate and flat fees of a listing."""

    base_price_per_night: Decimal
    cleaning_fee: Decimal = Decimal("0")
    service_fee: Decimal = Decimal("0")

    @classmethod
    def from_hotel(cls, hotel) -> "Pricing":
        return cls(
            base_price_per_night=hotel.base_price_per_night,
            cleaning_fee=hotel.cleaning_fee,
            service_fee=hotel.service_fee,
        )


@dataclass(frozen=True)
class PriceSnapshot:
    nights: int
    base_price_per_night: Decimal
    base_price_total: Decimal
    cleaning_fee: Decimal
    service_fee: Decimal
    subtotal: Decimal
    coupon_code: Optional[str]
    coupon_discount_percentage: Optional[Decimal]
    discounts: Decimal
    total_price: Decimal

    def as_dict(self) -> dict:
        return asdict(self)


def compute(
    pricing: Pricing,
    check_in: date,
    check_out: date,
    coupon_discount_percentage=None,
    coupon_code: Optional[str] = None,
) -> PriceSnapshot:
    """
    Build the price breakdown for a stay.

    ``coupon_discount_percentage`` is applied to the whole subtotal
    (nightly total plus cleaning and service fees).
    """
    nights = count_nights(check_in, check_out)

    base_price_per_night = to_decimal(pricing.base_price_per_night)
    cleaning_fee = to_decimal(pricing.cleaning_fee)
    service_fee = to_decimal(pricing.service_fee)

    base_price_total = base_price_per_night * nights
    subtotal = base_price_total + cleaning_fee + service_fee

    if coupon_discount_percentage is None:
        percentage = None
        discounts = round_money(Decimal("0"))
    else:
        percentage = to_decimal(coupon_discount_percentage)
        discounts = round_money(subtotal * percentage / HUNDRED)

    return PriceSnapshot(
        nights=nights,
        base_price_per_night=base_price_per_night,
        base_price_total=base_price_total,
        cleaning_fee=cleaning_fee,
        service_fee=service_fee,
        subtotal=subtotal,
        coupon_code=coupon_code if percentage is not None else None,
        coupon_discount_percentage=percentage,
        discounts=discounts,
        total_price=round_money(subtotal - discounts),
    )
