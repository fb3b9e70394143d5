import asyncio
import logging

from aiogram import Bot
from aiogram.exceptions import (
    AiogramError,
    TelegramAPIError,
    TelegramNetworkError,
    TelegramRetryAfter,
)
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

logger = logging.getLogger(__name__)


class TelegramNotificationService:
    """
    Delivers booking notifications to the operations chat.

    Rate limits and network failures are re-raised so the calling task can
    retry; any other Telegram error is logged and the message dropped.
    """

    MAX_MESSAGE_LENGTH = 4096

    _instance = None

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not hasattr(self, "token"):
            if not settings.TELEGRAM_BOT_TOKEN:
                logger.error("TELEGRAM_BOT_TOKEN is not set!")
                raise ImproperlyConfigured("TELEGRAM_BOT_TOKEN is missing!")
            self.token = settings.TELEGRAM_BOT_TOKEN
            self.default_chat_id = settings.CHAT_ID

    @classmethod
    def truncate(cls, text: str) -> str:
        if len(text) <= cls.MAX_MESSAGE_LENGTH:
            return text
        return text[: cls.MAX_MESSAGE_LENGTH - 1] + "…"

    async def _send_message_async(self, chat_id: int, text: str):
        # One bot session per event loop; asyncio.run() closes the loop after each send.
        bot = Bot(token=self.token)
        try:
            await bot.send_message(chat_id=chat_id, text=self.truncate(text))
            logger.info(f"Successfully sent message to chat_id {chat_id}")

        except TelegramRetryAfter as e:
            logger.warning(
                f"Rate limited for chat_id {chat_id}. Retrying in {e.retry_after} seconds."
            )
            raise

        except TelegramNetworkError as e:
            logger.warning(f"Telegram network error for chat_id {chat_id}: {e}. Retrying.")
            raise

        except TelegramAPIError as e:
            logger.error(f"Telegram API error for chat_id {chat_id}: {e}")

        except AiogramError as e:
            logger.error(f"General Aiogram error for chat_id {chat_id}: {e}")

        finally:
            await bot.session.close()

    def send_sync(self, text: str, chat_id=None) -> None:
        chat_id = chat_id or self.default_chat_id
        if not chat_id:
            raise ImproperlyConfigured("CHAT_ID is missing in settings.")
        asyncio.run(self._send_message_async(int(chat_id), text))
