from quizbot.keyboards.builders import (
    build_menu_keyboard,
    build_question_keyboard,
    build_restart_keyboard,
)
from quizbot.keyboards.callbacks import (
    END_QUIZ_CALLBACK,
    RESTART_QUIZ_CALLBACK,
    answer_callback_data,
    parse_answer_callback,
)

__all__ = [
    "build_menu_keyboard",
    "build_question_keyboard",
    "build_restart_keyboard",
    "END_QUIZ_CALLBACK",
    "RESTART_QUIZ_CALLBACK",
    "answer_callback_data",
    "parse_answer_callback",
]
