from aiogram.exceptions import TelegramNetworkError, TelegramRetryAfter
from celery import shared_task
from django.conf import settings
from django.db import transaction

from notifications.messages import generate_success_payment_message
from notifications.services.telegram import TelegramNotificationService
from payment.models import Payment


def queue_telegram_notification(message: str) -> bool:
    """
    Schedule ``message`` for delivery once the current transaction commits.

    Returns False when Telegram notifications are not configured.
    """
    if not settings.TELEGRAM_NOTIFICATIONS_ENABLED:
        return False

    transaction.on_commit(lambda: send_telegram_notification.delay(message))
    return True


@shared_task(
    autoretry_for=(TelegramRetryAfter, TelegramNetworkError),
    retry_kwargs={"max_retries": 5, "countdown": 30},
)
def send_telegram_notification(message: str):
    """
    Sends notification message to the configured Telegram chat.
    """
    TelegramNotificationService().send_sync(message)


@shared_task
def notify_successful_payment_telegram(payment_id):
    """Send detailed notification to Telegram about successful payment"""
    try:
        payment = Payment.objects.select_related(
            "booking__hotel", "booking__guest"
        ).get(id=payment_id, status=Payment.PaymentStatus.PAID)
    except Payment.DoesNotExist:
        return f"Could not find paid payment {payment_id}"

    send_telegram_notification.delay(
        generate_success_payment_message(payment.booking, payment)
    )
    return "Successfully triggered success notification."
