import logging

from django.db import transaction
from django.db.models import Avg, Count
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from booking.models import Booking
from booking.validators import validate_is_hotel_host
from common.exceptions import Unauthorized
from review.models import Review

logger = logging.getLogger(__name__)

REVIEWABLE_STATUSES = (
    Booking.BookingStatus.CHECKED_OUT,
    Booking.BookingStatus.COMPLETED,
)


def create_review(guest, booking_id, rating, comment="") -> Review:
    """
    Store the guest's review of a finished stay.

    Bookings of other guests are reported as missing.
    """
    with transaction.atomic():
        booking = (
            Booking.objects.select_for_update()
            .filter(pk=booking_id, guest=guest)
            .first()
        )
        if booking is None:
            raise NotFound("Booking not found.")

        if booking.status not in REVIEWABLE_STATUSES:
            raise ValidationError("You can review only after stay is completed.")

        if Review.objects.filter(booking=booking).exists():
            raise ValidationError("Review already exists for this booking.")

        review = Review.objects.create(
            booking=booking,
            hotel_id=booking.hotel_id,
            guest=guest,
            rating=rating,
            comment=comment,
        )

    logger.info(f"Review {review.id} ({rating}/5) added for Booking {booking.id}.")
    return review


def reply_to_review(review, host, text) -> Review:
    with transaction.atomic():
        review = Review.objects.select_for_update().select_related("hotel").get(
            pk=review.pk
        )
        validate_is_hotel_host(review.hotel, host)

        if review.hotel.is_suspended:
            raise Unauthorized("Cannot reply to reviews for a suspended hotel.")

        review.reply_text = text
        review.replied_at = timezone.now()
        review.replied_by = host
        review.save(update_fields=["reply_text", "replied_at", "replied_by", "updated_at"])

    return review


def hotel_rating(hotel) -> dict:
    """Average rating and number of reviews of ``hotel``."""
    stats = Review.objects.filter(hotel=hotel).aggregate(
        average=Avg("rating"), count=Count("id")
    )
    average = stats["average"]
    return {
        "hotel": hotel.pk,
        "average_rating": round(average, 2) if average is not None else None,
        "review_count": stats["count"],
    }
