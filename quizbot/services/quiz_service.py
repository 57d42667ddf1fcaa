import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

QUESTIONS_PATH = Path(__file__).parent.parent / "data" / "questions.json"

OPTIONS_PER_QUESTION = 4


@dataclass(frozen=True)
class QuizQuestion:
    """A single quiz item with four options and one correct answer."""

    question: str
    options: tuple[str, ...]
    correct: int

    def __post_init__(self) -> None:
        if len(self.options) != OPTIONS_PER_QUESTION:
            raise ValueError(
                f"Question {self.question!r} must have exactly "
                f"{OPTIONS_PER_QUESTION} options, got {len(self.options)}"
            )
        if not 0 <= self.correct < len(self.options):
            raise ValueError(
                f"Question {self.question!r} has invalid correct index {self.correct}"
            )

    @classmethod
    def from_dict(cls, raw: dict) -> "QuizQuestion":
        """Build a question from its JSON representation."""
        try:
            return cls(
                question=str(raw["question"]),
                options=tuple(str(option) for option in raw["options"]),
                # Handle both int and str types in hand-edited files
                correct=int(raw["correct"]),
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed question entry {raw!r}: {e}") from e

    def is_correct(self, option_idx: int) -> bool:
        return option_idx == self.correct

    @property
    def correct_answer(self) -> str:
        return self.options[self.correct]


class QuestionBank:
    """Ordered, read-only collection of quiz questions."""

    def __init__(self, questions: Sequence[QuizQuestion]) -> None:
        if not questions:
            raise ValueError("Question bank must contain at least one question")
        self._questions = tuple(questions)

    @classmethod
    def from_json(cls, path: Optional[Path] = None) -> "QuestionBank":
        """Load questions from a JSON file (the packaged bank by default)."""
        path = Path(path) if path is not None else QUESTIONS_PATH
        with path.open(encoding="utf-8") as f:
            raw = json.load(f)
        if not isinstance(raw, list):
            raise ValueError(f"{path}: expected a list of questions")
        return cls([QuizQuestion.from_dict(item) for item in raw])

    @property
    def count(self) -> int:
        return len(self._questions)

    def get_question(self, index: int) -> Optional[QuizQuestion]:
        """Get a specific question, or None when the index is out of range."""
        if 0 <= index < len(self._questions):
            return self._questions[index]
        return None

    def check_answer(self, question_idx: int, answer_idx: int) -> bool:
        """Check if the answer is correct."""
        question = self.get_question(question_idx)
        if question:
            return question.is_correct(answer_idx)
        return False

    def get_correct_answer(self, question_idx: int) -> Optional[str]:
        """Get the correct answer text for a question."""
        question = self.get_question(question_idx)
        if question:
            return question.correct_answer
        return None
