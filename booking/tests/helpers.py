from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.utils import timezone

from booking.models import Booking
from booking.pricing import Pricing, compute
from coupon.models import Coupon
from hotel.models import Hotel

User = get_user_model()


def make_user(username, **extra):
    return User.objects.create_user(
        username=username,
        email=f"{username}@test.com",
        password="password123",
        **extra,
    )


def make_hotel(owner, **overrides):
    fields = {
        "name": "Sea View",
        "max_guests": 4,
        "total_rooms": 1,
        "base_price_per_night": Decimal("100.00"),
        "cleaning_fee": Decimal("20.00"),
        "service_fee": Decimal("10.00"),
        "is_approved": True,
    }
    fields.update(overrides)
    return Hotel.objects.create(owner=owner, **fields)


def make_coupon(hotel, code="SAVE10", **overrides):
    today = timezone.localdate()
    fields = {
        "discount_percentage": Decimal("10.00"),
        "valid_from": today - timedelta(days=30),
        "valid_to": today + timedelta(days=30),
        "max_uses": None,
    }
    fields.update(overrides)
    return Coupon.objects.create(hotel=hotel, code=code, **fields)


def make_booking(
    hotel,
    guest,
    check_in,
    check_out,
    status=Booking.BookingStatus.PENDING,
    guests=1,
    coupon=None,
):
    """Store a booking directly, priced from the hotel's current rates."""
    booking = Booking(
        hotel=hotel,
        guest=guest,
        check_in_date=check_in,
        check_out_date=check_out,
        guests=guests,
        status=status,
        coupon=coupon,
    )
    booking.apply_price_snapshot(
        compute(
            Pricing.from_hotel(hotel),
            check_in,
            check_out,
            coupon_discount_percentage=coupon.discount_percentage if coupon else None,
            coupon_code=coupon.code if coupon else None,
        )
    )
    booking.save()
    return booking


def future(days):
    return timezone.localdate() + timedelta(days=days)
