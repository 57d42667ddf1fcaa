import random
from typing import Optional

from aiogram.types import (
    InlineKeyboardButton,
    InlineKeyboardMarkup,
    KeyboardButton,
    ReplyKeyboardMarkup,
)

from quizbot import texts
from quizbot.keyboards.callbacks import (
    END_QUIZ_CALLBACK,
    RESTART_QUIZ_CALLBACK,
    answer_callback_data,
)
from quizbot.services.quiz_service import QuizQuestion


def build_menu_keyboard() -> ReplyKeyboardMarkup:
    """Build the persistent reply keyboard shown after /start."""
    return ReplyKeyboardMarkup(
        keyboard=[
            [
                KeyboardButton(text=texts.BUTTON_START_QUIZ),
                KeyboardButton(text=texts.BUTTON_MY_SCORE),
            ]
        ],
        resize_keyboard=True,
    )


def build_question_keyboard(
    question: QuizQuestion,
    question_idx: int,
    shuffle: bool = False,
    rng: Optional[random.Random] = None,
) -> InlineKeyboardMarkup:
    """
    Build keyboard for answer options plus a "give up" button.

    Shuffling only changes the display order; every button keeps the
    original option index in its callback token.
    """
    indices = list(range(len(question.options)))
    if shuffle:
        (rng or random).shuffle(indices)

    rows = [
        [
            InlineKeyboardButton(
                text=question.options[i],
                callback_data=answer_callback_data(question_idx, i),
            )
        ]
        for i in indices
    ]
    rows.append(
        [InlineKeyboardButton(text=texts.BUTTON_END_QUIZ, callback_data=END_QUIZ_CALLBACK)]
    )
    return InlineKeyboardMarkup(inline_keyboard=rows)


def build_restart_keyboard() -> InlineKeyboardMarkup:
    """Build keyboard offering another run."""
    return InlineKeyboardMarkup(
        inline_keyboard=[
            [
                InlineKeyboardButton(
                    text=texts.BUTTON_RESTART, callback_data=RESTART_QUIZ_CALLBACK
                )
            ]
        ]
    )
