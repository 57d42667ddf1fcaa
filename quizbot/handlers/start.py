import logging

from aiogram import F, Router
from aiogram.filters import Command
from aiogram.types import Message

from quizbot import texts
from quizbot.keyboards import build_menu_keyboard
from quizbot.services.gateway import MessagingGateway
from quizbot.services.quiz_engine import QuizEngine

router = Router()


@router.message(Command("start"))
async def cmd_start(msg: Message, gateway: MessagingGateway) -> None:
    """Handle /start command - greet and show the menu keyboard."""
    logging.info(f"/start from {msg.chat.id}")
    await gateway.send_message(msg.chat.id, texts.WELCOME, build_menu_keyboard())


@router.message(Command("quiz"))
@router.message(F.text == texts.BUTTON_START_QUIZ)
async def cmd_quiz(msg: Message, engine: QuizEngine) -> None:
    """Start (or restart) the quiz."""
    await engine.start(msg.chat.id)


@router.message(Command("score"))
@router.message(F.text == texts.BUTTON_MY_SCORE)
async def cmd_score(msg: Message, engine: QuizEngine) -> None:
    """Show the latest result."""
    await engine.score(msg.chat.id)


@router.message(F.text == texts.BUTTON_END_QUIZ)
async def end_quiz_text(msg: Message, engine: QuizEngine) -> None:
    """Finish the quiz from a text message."""
    await engine.terminate(msg.chat.id)


@router.message()
async def other_message(msg: Message) -> None:
    logging.debug(f"Ignoring message from {msg.chat.id}: {msg.text!r}")
