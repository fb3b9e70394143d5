import logging

from django.db import IntegrityError
from rest_framework import status
from rest_framework.exceptions import APIException, NotFound, PermissionDenied
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class AvailabilityError(APIException):
    """The hotel cannot take the requested stay (capacity or date conflict)."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "The hotel is not available for the selected dates."
    default_code = "availability_error"


class CouponNotFound(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Coupon code is not valid for this hotel."
    default_code = "coupon_not_found"


class CouponExpired(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Coupon is not valid on this date."
    default_code = "coupon_expired"


class CouponExhausted(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Coupon usage limit has been reached."
    default_code = "coupon_exhausted"


class InvalidTransition(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "This action is not allowed for the booking in its current state."
    default_code = "invalid_transition"


class InvalidDateRange(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid date range."
    default_code = "invalid_date_range"


class Unauthorized(PermissionDenied):
    """Authenticated actor is not permitted to act on this hotel or booking."""

    default_detail = "You are not allowed to perform this action."
    default_code = "unauthorized"


def _first_code(codes):
    while isinstance(codes, (list, dict)):
        if not codes:
            return None
        codes = next(iter(codes.values())) if isinstance(codes, dict) else codes[0]
    return codes


def custom_exception_handler(exc, context):
    """
    Render every API error as ``{"code": ..., "message": ...}``.

    Field validation failures keep the per-field details under ``errors``.
    """
    response = exception_handler(exc, context)

    if response is None:
        if isinstance(exc, IntegrityError):
            return Response(
                {"code": "integrity_error", "message": "Database integrity error."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        return None

    if isinstance(exc, ValidationError):
        detail = exc.detail
        if isinstance(detail, list) and len(detail) == 1:
            message = str(detail[0])
        else:
            message = "Invalid input."
        response.data = {
            "code": "validation_error",
            "message": message,
            "errors": response.data,
        }
        return response

    if isinstance(exc, NotFound) or response.status_code == status.HTTP_404_NOT_FOUND:
        code = "not_found"
    elif isinstance(exc, APIException):
        code = _first_code(exc.get_codes()) or exc.default_code
    else:
        code = "error"

    message = response.data.get("detail") if isinstance(response.data, dict) else None
    response.data = {"code": code, "message": str(message or exc)}
    if response.status_code in (status.HTTP_403_FORBIDDEN, status.HTTP_409_CONFLICT):
        logger.warning(f"Refused request: {code} - {response.data['message']}")
    return response
