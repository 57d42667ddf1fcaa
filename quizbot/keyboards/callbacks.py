import re
from typing import Optional

ANSWER_PREFIX = "answer_"
END_QUIZ_CALLBACK = "end_quiz"
RESTART_QUIZ_CALLBACK = "restart_quiz"

ANSWER_RE = re.compile(r"^answer_(\d{1,4})_(\d{1,2})$")


def answer_callback_data(question_idx: int, option_idx: int) -> str:
    """Callback token for an answer button."""
    return f"{ANSWER_PREFIX}{question_idx}_{option_idx}"


def parse_answer_callback(data: Optional[str]) -> Optional[tuple[int, int]]:
    """
    Parse an answer token.

    Returns:
        tuple: (question_idx, option_idx), or None for a malformed token
    """
    if not data:
        return None
    match = ANSWER_RE.fullmatch(data)
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))
