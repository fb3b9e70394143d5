from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver

from booking.models import Booking
from notifications.messages import (
    generate_booking_cancellation_message,
    generate_booking_confirmation_message,
    generate_booking_creation_message,
    generate_booking_reschedule_message,
)
from notifications.tasks import queue_telegram_notification


@receiver(post_save, sender=Booking)
def booking_notification(sender, instance, created, update_fields=None, **kwargs):
    """
    Send Telegram notifications about booking activity.

    Signal Handler: Triggered after any Booking instance is saved.

    Lifecycle operations save with ``update_fields``; a status change or
    a date change in that list selects the message to send.
    """
    if not settings.TELEGRAM_NOTIFICATIONS_ENABLED:
        return

    if created:
        queue_telegram_notification(generate_booking_creation_message(instance))
        return

    update_fields = update_fields or ()

    if "check_in_date" in update_fields:
        queue_telegram_notification(generate_booking_reschedule_message(instance))

    if "status" not in update_fields:
        return

    if instance.status == Booking.BookingStatus.CONFIRMED:
        queue_telegram_notification(generate_booking_confirmation_message(instance))
    elif instance.status == Booking.BookingStatus.CANCELLED:
        queue_telegram_notification(generate_booking_cancellation_message(instance))
