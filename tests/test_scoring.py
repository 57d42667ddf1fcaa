import random

import pytest

from quizbot.services.scoring import (
    ENCOURAGEMENTS,
    FEEDBACK_TIERS,
    RETRY_FEEDBACK,
    calculate_percentage,
    get_encouragement,
    get_final_message,
)

TOP, STRONG, MIDDLING = (feedback for _, feedback in FEEDBACK_TIERS)


def test_percentage_truncates():
    result = calculate_percentage(2, 5)
    assert result == 40
    assert isinstance(result, int)
    assert calculate_percentage(2, 3) == 66
    assert calculate_percentage(5, 5) == 100


def test_percentage_of_empty_bank_is_zero():
    assert calculate_percentage(0, 0) == 0


@pytest.mark.parametrize(
    "percentage, expected",
    [
        (100, TOP),
        (90, TOP),
        (89, STRONG),
        (70, STRONG),
        (69, MIDDLING),
        (50, MIDDLING),
        (49, RETRY_FEEDBACK),
        (0, RETRY_FEEDBACK),
    ],
)
def test_feedback_tiers(percentage, expected):
    assert get_final_message(percentage) == expected


def test_tiers_are_distinct():
    assert len({TOP, STRONG, MIDDLING, RETRY_FEEDBACK}) == 4


def test_encouragement_is_deterministic_with_seeded_rng():
    first = get_encouragement(random.Random(3))
    second = get_encouragement(random.Random(3))
    assert first == second
    assert first in ENCOURAGEMENTS


def test_encouragement_without_rng():
    assert get_encouragement() in ENCOURAGEMENTS
