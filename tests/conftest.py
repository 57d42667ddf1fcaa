"""Shared fakes and fixtures."""

import asyncio
import random
from dataclasses import dataclass
from typing import Any, Optional

import pytest

from quizbot.services.quiz_engine import QuizEngine
from quizbot.services.quiz_service import QuestionBank
from quizbot.services.session_store import SessionStore

# Correct option per question in the packaged bank
CORRECT = [2, 1, 3, 0, 1]


@dataclass
class SentMessage:
    user_id: int
    text: str
    reply_markup: Any
    message_id: int


class RecordingGateway:
    """Gateway stand-in that records every outbound call."""

    def __init__(self) -> None:
        self.sent: list[SentMessage] = []
        self.edits: list[tuple[int, int, str]] = []
        self.acks: list[tuple[str, str]] = []
        self._next_id = 100

    async def send_message(
        self, user_id: int, text: str, reply_markup: Any = None
    ) -> Optional[int]:
        self._next_id += 1
        self.sent.append(SentMessage(user_id, text, reply_markup, self._next_id))
        return self._next_id

    async def edit_message(self, user_id: int, message_id: int, text: str) -> None:
        self.edits.append((user_id, message_id, text))

    async def send_ack(self, event_id: str, text: str) -> None:
        self.acks.append((event_id, text))

    def texts(self, user_id: Optional[int] = None) -> list[str]:
        return [m.text for m in self.sent if user_id is None or m.user_id == user_id]

    @property
    def last(self) -> SentMessage:
        return self.sent[-1]


def run(coro):
    return asyncio.run(coro)


def assert_invariant(engine: QuizEngine, user_id: int) -> None:
    session = engine.store.get(user_id)
    if session is None:
        return
    assert 0 <= session.score <= session.current_question <= engine.question_count


@pytest.fixture
def bank() -> QuestionBank:
    return QuestionBank.from_json()


@pytest.fixture
def gateway() -> RecordingGateway:
    return RecordingGateway()


@pytest.fixture
def store() -> SessionStore:
    return SessionStore()


@pytest.fixture
def engine(gateway, bank, store) -> QuizEngine:
    return QuizEngine(
        gateway, bank, store=store, next_question_delay=0, rng=random.Random(7)
    )
