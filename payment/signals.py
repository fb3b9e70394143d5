import logging

from django.conf import settings
from django.db import transaction
from django.db.models.signals import post_save
from django.dispatch import receiver

from notifications.tasks import notify_successful_payment_telegram
from payment.models import Payment

logger = logging.getLogger(__name__)


@receiver(post_save, sender=Payment)
def payment_notification(sender, instance, created, **kwargs):
    """
    Sends a Telegram notification when a payment is recorded as PAID.
    """
    if created and instance.status == Payment.PaymentStatus.PAID:
        logger.info(
            f"Payment {instance.id} for Booking {instance.booking_id} recorded as PAID."
        )
        if settings.TELEGRAM_NOTIFICATIONS_ENABLED:
            transaction.on_commit(
                lambda: notify_successful_payment_telegram.delay(instance.id)
            )
