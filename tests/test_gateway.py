import logging
from types import SimpleNamespace
from unittest.mock import AsyncMock

from aiogram.exceptions import TelegramBadRequest, TelegramNetworkError
from aiogram.methods import AnswerCallbackQuery, EditMessageText, SendMessage

from quizbot.services.gateway import TelegramGateway
from quizbot.services.quiz_engine import QuizEngine

from conftest import run


def _ok_bot():
    return SimpleNamespace(
        send_message=AsyncMock(return_value=SimpleNamespace(message_id=42)),
        edit_message_text=AsyncMock(),
        answer_callback_query=AsyncMock(),
    )


def _failing_bot():
    return SimpleNamespace(
        send_message=AsyncMock(
            side_effect=TelegramBadRequest(
                method=SendMessage(chat_id=1, text="x"),
                message="Bad Request: chat not found",
            )
        ),
        edit_message_text=AsyncMock(
            side_effect=TelegramBadRequest(
                method=EditMessageText(text="x", chat_id=1, message_id=1),
                message="Bad Request: message is not modified",
            )
        ),
        answer_callback_query=AsyncMock(
            side_effect=TelegramNetworkError(
                method=AnswerCallbackQuery(callback_query_id="cb"),
                message="timeout",
            )
        ),
    )


def test_gateway_delivers_through_bot():
    bot = _ok_bot()
    gateway = TelegramGateway(bot)

    async def _test():
        message_id = await gateway.send_message(7, "hello", None)
        await gateway.edit_message(7, message_id, "edited")
        await gateway.send_ack("cb-1", "ok")
        return message_id

    assert run(_test()) == 42
    bot.send_message.assert_awaited_once_with(7, "hello", reply_markup=None)
    bot.edit_message_text.assert_awaited_once_with(text="edited", chat_id=7, message_id=42)
    bot.answer_callback_query.assert_awaited_once_with("cb-1", text="ok")


def test_gateway_logs_transport_faults(caplog):
    gateway = TelegramGateway(_failing_bot())

    async def _test():
        message_id = await gateway.send_message(7, "hello")
        await gateway.edit_message(7, 1, "edited")
        await gateway.send_ack("cb-1", "ok")
        return message_id

    with caplog.at_level(logging.WARNING):
        assert run(_test()) is None

    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 3


def test_engine_keeps_going_when_transport_fails(bank):
    engine = QuizEngine(TelegramGateway(_failing_bot()), bank, next_question_delay=0)

    async def _test():
        await engine.start(7)
        assert await engine.submit(7, 0, 2, message_id=None, event_id="cb")
        await engine.drain()
        assert await engine.terminate(7)

    run(_test())
    session = engine.store.get(7)
    assert (session.score, session.current_question, session.active) == (1, 1, False)
