import logging
from typing import Optional, Protocol, Union

from aiogram import Bot
from aiogram.exceptions import TelegramAPIError
from aiogram.types import InlineKeyboardMarkup, ReplyKeyboardMarkup

ReplyMarkup = Union[InlineKeyboardMarkup, ReplyKeyboardMarkup]


class MessagingGateway(Protocol):
    """Outbound side of the chat transport used by the quiz engine."""

    async def send_message(
        self, user_id: int, text: str, reply_markup: Optional[ReplyMarkup] = None
    ) -> Optional[int]:
        ...

    async def edit_message(self, user_id: int, message_id: int, text: str) -> None:
        ...

    async def send_ack(self, event_id: str, text: str) -> None:
        ...


class TelegramGateway:
    """
    Deliver engine output through the Telegram Bot API.

    Transport faults are logged and swallowed: the caller carries on as if
    the message had been delivered. Nothing is retried.
    """

    def __init__(self, bot: Bot) -> None:
        self.bot = bot

    async def send_message(
        self, user_id: int, text: str, reply_markup: Optional[ReplyMarkup] = None
    ) -> Optional[int]:
        try:
            msg = await self.bot.send_message(user_id, text, reply_markup=reply_markup)
        except TelegramAPIError as e:
            logging.warning(f"Failed to send message to {user_id}: {e}")
            return None
        return msg.message_id

    async def edit_message(self, user_id: int, message_id: int, text: str) -> None:
        try:
            await self.bot.edit_message_text(
                text=text, chat_id=user_id, message_id=message_id
            )
        except TelegramAPIError as e:
            logging.warning(f"Failed to edit message {message_id} for {user_id}: {e}")

    async def send_ack(self, event_id: str, text: str) -> None:
        try:
            await self.bot.answer_callback_query(event_id, text=text)
        except TelegramAPIError as e:
            logging.warning(f"Failed to answer callback {event_id}: {e}")
