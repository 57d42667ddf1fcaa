import asyncio
import logging
import sys

from aiogram import Bot, Dispatcher
from aiogram.exceptions import TelegramAPIError
from aiogram.types import BotCommand, BotCommandScopeDefault

from quizbot import texts
from quizbot.config import ConfigError, Settings, load_settings
from quizbot.handlers import setup_routers
from quizbot.services.gateway import TelegramGateway
from quizbot.services.quiz_engine import QuizEngine
from quizbot.services.quiz_service import QuestionBank

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


async def on_startup(bot: Bot) -> None:
    """Switch to long polling and publish the command menu."""
    try:
        await bot.delete_webhook(drop_pending_updates=False)
        logging.info("Webhook очищен")
    except TelegramAPIError as e:
        logging.warning(f"Не удалось удалить webhook: {e}")

    await bot.set_my_commands(
        [
            BotCommand(command="start", description=texts.COMMAND_START),
            BotCommand(command="quiz", description=texts.COMMAND_QUIZ),
            BotCommand(command="score", description=texts.COMMAND_SCORE),
        ],
        scope=BotCommandScopeDefault(),
    )
    me = await bot.get_me()
    logging.info(f"Бот {me.username} запущен! Ожидаю сообщения...")


async def on_shutdown(engine: QuizEngine) -> None:
    await engine.shutdown()
    logging.info("Бот остановлен")


def build_dispatcher(bot: Bot, settings: Settings) -> Dispatcher:
    """Wire the engine, gateway and routers into a dispatcher."""
    gateway = TelegramGateway(bot)
    engine = QuizEngine(
        gateway,
        QuestionBank.from_json(settings.questions_path),
        next_question_delay=settings.next_question_delay,
        shuffle_options=settings.shuffle_options,
    )

    dp = Dispatcher(engine=engine, gateway=gateway)
    dp.include_router(setup_routers())
    dp.startup.register(on_startup)
    dp.shutdown.register(on_shutdown)
    return dp


async def main(settings: Settings) -> None:
    bot = Bot(token=settings.bot_token)
    dp = build_dispatcher(bot, settings)
    logging.info(f"Loaded {dp['engine'].question_count} questions")
    try:
        await dp.start_polling(bot)
    finally:
        await bot.session.close()


def run() -> None:
    try:
        settings = load_settings()
    except ConfigError as e:
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
        logging.critical(str(e))
        sys.exit(1)

    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    asyncio.run(main(settings))


if __name__ == "__main__":
    run()
