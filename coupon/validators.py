import re
from dataclasses import dataclass
from datetime import date
from typing import Optional

from rest_framework.exceptions import ValidationError

from common.exceptions import CouponExhausted, CouponExpired, CouponNotFound
from coupon.models import Coupon

COUPON_CODE_PATTERN = re.compile(r"^[A-Z0-9]{3,20}$")

COUPON_ERRORS = {
    CouponNotFound.default_code: CouponNotFound,
    CouponExpired.default_code: CouponExpired,
    CouponExhausted.default_code: CouponExhausted,
}


@dataclass(frozen=True)
class CouponValidation:
    valid: bool
    coupon: Optional[Coupon] = None
    reason: Optional[str] = None

    def raise_for_reason(self):
        if not self.valid:
            raise COUPON_ERRORS[self.reason]()


def normalize_code(code):
    return (code or "").strip().upper()


def validate_coupon_code_format(code):
    """
    Validate that a coupon code is 3-20 upper-case letters or digits.
    """
    normalized = normalize_code(code)
    if not COUPON_CODE_PATTERN.match(normalized):
        raise ValidationError(
            "Coupon code must be 3-20 characters of letters and digits."
        )
    return normalized


def validate_coupon_window(valid_from, valid_to):
    """
    Validate that the validity window is not inverted.
    """
    if valid_from and valid_to and valid_from > valid_to:
        raise ValidationError("valid_from must not be after valid_to")


def validate_max_uses(max_uses, current_uses):
    """
    Validate that a usage cap is not set below the uses already granted.
    """
    if max_uses is not None and max_uses < current_uses:
        raise ValidationError(
            f"max_uses cannot be lower than the {current_uses} use(s) already made."
        )


def validate_coupon(coupon, code, hotel, on_date: date) -> CouponValidation:
    """
    Check a looked-up coupon against the code, hotel, date and usage cap.

    Does not raise; see :func:`resolve_coupon` for the raising variant.
    """
    if not normalize_code(code):
        return CouponValidation(valid=True)

    if (
        coupon is None
        or coupon.hotel_id != hotel.pk
        or coupon.code != normalize_code(code)
    ):
        return CouponValidation(valid=False, reason=CouponNotFound.default_code)

    if not coupon.is_valid_on(on_date):
        return CouponValidation(
            valid=False, coupon=coupon, reason=CouponExpired.default_code
        )

    if coupon.is_exhausted:
        return CouponValidation(
            valid=False, coupon=coupon, reason=CouponExhausted.default_code
        )

    return CouponValidation(valid=True, coupon=coupon)


def resolve_coupon(hotel, code, on_date: date, lock=False) -> Optional[Coupon]:
    """
    Find the coupon ``code`` of ``hotel`` and make sure it can be applied.

    With ``lock=True`` the coupon row is locked until the surrounding
    transaction ends, so usage can be incremented without racing.
    """
    normalized = normalize_code(code)
    if not normalized:
        return None

    queryset = Coupon.objects.filter(hotel=hotel, code=normalized)
    if lock:
        queryset = queryset.select_for_update()

    result = validate_coupon(queryset.first(), normalized, hotel, on_date)
    result.raise_for_reason()
    return result.coupon
