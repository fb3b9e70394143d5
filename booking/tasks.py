from celery import shared_task

from booking.services import complete_checked_out_bookings as complete_bookings


@shared_task
def complete_checked_out_bookings():
    """
    Mark checked-out bookings as COMPLETED so guests can leave a review.
    Scheduled Task: Runs daily at midnight via Celery Beat.
    """
    completed_count = complete_bookings()
    return f"Marked {completed_count} bookings as COMPLETED"
