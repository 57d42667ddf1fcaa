import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv  # pip install python-dotenv

from quizbot.services.quiz_service import QUESTIONS_PATH

PROJECT_ROOT = Path(__file__).parent.parent


class ConfigError(RuntimeError):
    """Missing or invalid configuration; the bot cannot start."""


@dataclass(frozen=True)
class Settings:
    bot_token: str
    log_level: str = "INFO"
    next_question_delay: float = 2.0
    shuffle_options: bool = False
    questions_path: Path = QUESTIONS_PATH


def load_env(env_file: Optional[str] = None) -> None:
    """Load variables from the env file (name from ENV_FILE, default .env)."""
    env_file = env_file or os.getenv("ENV_FILE", ".env")
    path = Path(env_file)
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    load_dotenv(path)


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Build settings from the environment, raising ConfigError on bad values."""
    load_env(env_file)

    bot_token = os.getenv("TELEGRAM_BOT_TOKEN") or os.getenv("BOT_TOKEN")
    if not bot_token:
        raise ConfigError(
            "Токен бота не найден! Установите переменную TELEGRAM_BOT_TOKEN"
        )

    raw_delay = os.getenv("QUIZ_NEXT_DELAY", "2")
    try:
        delay = float(raw_delay)
    except ValueError as e:
        raise ConfigError(f"QUIZ_NEXT_DELAY must be a number, got {raw_delay!r}") from e
    if delay < 0:
        raise ConfigError(f"QUIZ_NEXT_DELAY must not be negative, got {delay}")

    questions_path = os.getenv("QUIZ_QUESTIONS_PATH")

    return Settings(
        bot_token=bot_token,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        next_question_delay=delay,
        shuffle_options=os.getenv("QUIZ_SHUFFLE_OPTIONS", "0").lower()
        in ("1", "true", "yes"),
        questions_path=Path(questions_path) if questions_path else QUESTIONS_PATH,
    )
