import random
from typing import Optional

ENCOURAGEMENTS = (
    "Отлично!",
    "Превосходно!",
    "Ай да ты!",
    "Нормалек!",
    "Великолепно!",
)

# (minimum percentage, feedback), checked top to bottom
FEEDBACK_TIERS = (
    (90, "Вы гений! Идеально!"),
    (70, "Отличный результат! Вы хорошо разбираетесь в теме!"),
    (50, "Хороший результат! Есть куда стремиться!"),
)
RETRY_FEEDBACK = "Не сдавайтесь! Попробуйте еще раз!"


def calculate_percentage(score: int, total: int) -> int:
    """Share of correct answers, truncated to a whole percent."""
    if total <= 0:
        return 0
    return score * 100 // total


def get_final_message(percentage: int) -> str:
    """Pick the feedback tier for a percentage."""
    for threshold, feedback in FEEDBACK_TIERS:
        if percentage >= threshold:
            return feedback
    return RETRY_FEEDBACK


def get_encouragement(rng: Optional[random.Random] = None) -> str:
    """Random praise for a correct answer."""
    return (rng or random).choice(ENCOURAGEMENTS)
