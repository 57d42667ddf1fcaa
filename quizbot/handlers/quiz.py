import logging

from aiogram import F, Router
from aiogram.types import CallbackQuery

from quizbot import texts
from quizbot.keyboards import (
    END_QUIZ_CALLBACK,
    RESTART_QUIZ_CALLBACK,
    parse_answer_callback,
)
from quizbot.keyboards.callbacks import ANSWER_PREFIX
from quizbot.services.quiz_engine import QuizEngine

router = Router()


@router.callback_query(F.data.startswith(ANSWER_PREFIX))
async def handle_answer(cb: CallbackQuery, engine: QuizEngine) -> None:
    """Handle user's answer."""
    parsed = parse_answer_callback(cb.data)
    if parsed is None or cb.message is None:
        logging.debug(f"Dropping malformed answer callback: {cb.data!r}")
        return

    qidx, opt = parsed
    await engine.submit(
        cb.message.chat.id,
        qidx,
        opt,
        message_id=cb.message.message_id,
        event_id=cb.id,
    )


@router.callback_query(F.data == END_QUIZ_CALLBACK)
async def handle_end_quiz(cb: CallbackQuery, engine: QuizEngine) -> None:
    """Handle the "give up" button."""
    if cb.message is None:
        return
    await engine.terminate(cb.message.chat.id)
    await engine.acknowledge(cb.id, texts.QUIZ_ENDED_ACK)


@router.callback_query(F.data == RESTART_QUIZ_CALLBACK)
async def handle_restart_quiz(cb: CallbackQuery, engine: QuizEngine) -> None:
    """Handle the restart button under the summary."""
    if cb.message is None:
        return
    await engine.start(cb.message.chat.id)
    await engine.acknowledge(cb.id, texts.QUIZ_RESTARTED_ACK)


@router.callback_query()
async def unknown_callback(cb: CallbackQuery) -> None:
    """Drop callbacks this bot never issued."""
    logging.debug(f"Dropping unknown callback: {cb.data!r}")
