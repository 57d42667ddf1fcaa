import asyncio
import logging
import random
from dataclasses import replace
from typing import Optional

from quizbot import texts
from quizbot.keyboards import build_question_keyboard, build_restart_keyboard
from quizbot.services.gateway import MessagingGateway
from quizbot.services.quiz_service import QuestionBank
from quizbot.services.scoring import (
    calculate_percentage,
    get_encouragement,
    get_final_message,
)
from quizbot.services.session_store import SessionStore, UserSession

NEXT_QUESTION_DELAY = 2.0


class QuizEngine:
    """
    Per-user quiz state machine.

    A session moves forward only: start -> question 0 -> ... -> completed.
    Every change to a session happens under that user's lock in the store;
    messages are sent after the lock is released.
    """

    def __init__(
        self,
        gateway: MessagingGateway,
        questions: QuestionBank,
        store: Optional[SessionStore] = None,
        next_question_delay: float = NEXT_QUESTION_DELAY,
        rng: Optional[random.Random] = None,
        shuffle_options: bool = False,
    ) -> None:
        self.gateway = gateway
        self.questions = questions
        self.store = store if store is not None else SessionStore()
        self.next_question_delay = next_question_delay
        self.rng = rng or random.Random()
        self.shuffle_options = shuffle_options
        # user_id -> (generation, delayed prompt task)
        self._pending: dict[int, tuple[int, asyncio.Task]] = {}

    @property
    def question_count(self) -> int:
        return self.questions.count

    async def start(self, user_id: int) -> None:
        """Begin a new quiz, discarding any previous progress."""
        self._cancel_pending(user_id)
        session = await self.store.reset(user_id)
        logging.info(f"Quiz started for {user_id} (generation {session.generation})")
        await self.prompt(user_id, 0, generation=session.generation)

    async def prompt(
        self, user_id: int, index: int, generation: Optional[int] = None
    ) -> None:
        """Send question `index` if the session is still waiting for it."""
        async with self.store.locked(user_id) as session:
            if not self._expects(session, index, generation):
                logging.debug(f"Skipping stale prompt {index} for {user_id}")
                return

        if index >= self.question_count:
            await self.terminate(user_id)
            return

        question = self.questions.get_question(index)
        keyboard = build_question_keyboard(
            question, index, shuffle=self.shuffle_options, rng=self.rng
        )
        text = texts.QUESTION.format(
            number=index + 1, total=self.question_count, question=question.question
        )
        logging.debug(f"Sending question {index} to {user_id}")
        await self.gateway.send_message(user_id, text, keyboard)

    async def submit(
        self,
        user_id: int,
        question_idx: int,
        option_idx: int,
        message_id: Optional[int] = None,
        event_id: Optional[str] = None,
    ) -> bool:
        """
        Apply an answer to the current question.

        Returns False, without sending anything, when there is no active
        session, the answer is for a question other than the current one
        (stale or duplicate tap) or the option does not exist.
        """
        async with self.store.locked(user_id) as session:
            if session is None or not session.active:
                logging.debug(f"Answer from {user_id} without an active quiz")
                return False
            if question_idx != session.current_question:
                logging.debug(
                    f"Stale answer from {user_id}: question {question_idx}, "
                    f"expected {session.current_question}"
                )
                return False
            question = self.questions.get_question(question_idx)
            if question is None or not 0 <= option_idx < len(question.options):
                logging.debug(f"Invalid option {option_idx} from {user_id}")
                return False

            is_correct = self.questions.check_answer(question_idx, option_idx)
            if is_correct:
                session.score += 1
            session.current_question += 1
            finished = session.current_question >= self.question_count
            if finished:
                session.active = False
            snapshot = replace(session)

        if is_correct:
            result = texts.CORRECT_ANSWER.format(
                encouragement=get_encouragement(self.rng)
            )
        else:
            result = texts.WRONG_ANSWER.format(
                answer=self.questions.get_correct_answer(question_idx)
            )

        if event_id is not None:
            await self.gateway.send_ack(event_id, result)
        if message_id is not None:
            await self.gateway.edit_message(
                user_id,
                message_id,
                texts.ANSWERED_QUESTION.format(
                    number=question_idx + 1,
                    total=self.question_count,
                    question=question.question,
                    result=result,
                ),
            )

        if finished:
            logging.info(
                f"Quiz completed by {user_id}: {snapshot.score}/{self.question_count}"
            )
            await self._send_summary(user_id, snapshot)
        else:
            self._schedule_prompt(user_id, snapshot.current_question, snapshot.generation)
        return True

    async def terminate(self, user_id: int) -> bool:
        """Stop the quiz and send the summary. Safe to call repeatedly."""
        self._cancel_pending(user_id)
        async with self.store.locked(user_id) as session:
            if session is None:
                return False
            if session.active:
                logging.info(
                    f"Quiz terminated by {user_id} at question {session.current_question}"
                )
            session.active = False
            snapshot = replace(session)

        await self._send_summary(user_id, snapshot)
        return True

    async def score(self, user_id: int) -> None:
        """Report the latest (possibly partial) result."""
        async with self.store.locked(user_id) as session:
            snapshot = replace(session) if session else None

        if snapshot is None:
            await self.gateway.send_message(user_id, texts.NO_QUIZ_YET)
            return

        percentage = calculate_percentage(snapshot.score, self.question_count)
        await self.gateway.send_message(
            user_id,
            texts.SCORE.format(
                score=snapshot.score,
                total=self.question_count,
                percentage=percentage,
                feedback=get_final_message(percentage),
            ),
        )

    async def acknowledge(self, event_id: str, text: str) -> None:
        await self.gateway.send_ack(event_id, text)

    async def drain(self) -> None:
        """Wait for every scheduled question to be sent (or skipped)."""
        while self._pending:
            await asyncio.gather(
                *[task for _, task in list(self._pending.values())],
                return_exceptions=True,
            )

    async def shutdown(self) -> None:
        """Cancel scheduled questions."""
        tasks = [task for _, task in self._pending.values()]
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._pending.clear()

    def has_pending(self, user_id: int) -> bool:
        return user_id in self._pending

    def _expects(
        self, session: Optional[UserSession], index: int, generation: Optional[int]
    ) -> bool:
        if session is None or not session.active:
            return False
        if generation is not None and session.generation != generation:
            return False
        # Past the end means "finish", whatever question is current
        return index >= self.question_count or session.current_question == index

    async def _send_summary(self, user_id: int, session: UserSession) -> None:
        percentage = calculate_percentage(session.score, self.question_count)
        await self.gateway.send_message(
            user_id,
            texts.QUIZ_SUMMARY.format(
                score=session.score,
                total=self.question_count,
                percentage=percentage,
                feedback=get_final_message(percentage),
            ),
            build_restart_keyboard(),
        )

    def _schedule_prompt(self, user_id: int, index: int, generation: int) -> None:
        current = self.store.get(user_id)
        if current is None or current.generation != generation:
            logging.debug(f"Not scheduling question {index} for replaced run of {user_id}")
            return
        pending = self._pending.get(user_id)
        if pending is not None and pending[0] > generation:
            return

        self._cancel_pending(user_id)
        task = asyncio.create_task(self._delayed_prompt(user_id, index, generation))
        self._pending[user_id] = (generation, task)

        def _forget(done: asyncio.Task) -> None:
            entry = self._pending.get(user_id)
            if entry is not None and entry[1] is done:
                del self._pending[user_id]

        task.add_done_callback(_forget)

    async def _delayed_prompt(self, user_id: int, index: int, generation: int) -> None:
        await asyncio.sleep(self.next_question_delay)
        try:
            await self.prompt(user_id, index, generation=generation)
        except Exception:
            logging.exception(f"Failed to send question {index} to {user_id}")

    def _cancel_pending(self, user_id: int) -> None:
        entry = self._pending.get(user_id)
        # A delayed prompt may reach terminate() itself
        if entry is None or entry[1] is asyncio.current_task():
            return
        entry[1].cancel()
        del self._pending[user_id]
