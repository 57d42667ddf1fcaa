import asyncio
from collections import defaultdict
from contextlib import asynccontextmanager
from dataclasses import dataclass, replace
from typing import AsyncIterator, Optional


@dataclass
class UserSession:
    """Progress of one user through the question sequence."""

    current_question: int = 0
    score: int = 0
    active: bool = True
    generation: int = 0


class SessionStore:
    """In-memory sessions keyed by user, with one lock per user."""

    def __init__(self) -> None:
        self._sessions: dict[int, UserSession] = {}
        self._locks: dict[int, asyncio.Lock] = defaultdict(asyncio.Lock)

    def get(self, user_id: int) -> Optional[UserSession]:
        """Return a detached copy of the user's session."""
        session = self._sessions.get(user_id)
        return replace(session) if session else None

    async def reset(self, user_id: int) -> UserSession:
        """Replace the user's session with a fresh active one."""
        async with self._locks[user_id]:
            previous = self._sessions.get(user_id)
            generation = previous.generation + 1 if previous else 1
            session = UserSession(generation=generation)
            self._sessions[user_id] = session
            return replace(session)

    @asynccontextmanager
    async def locked(self, user_id: int) -> AsyncIterator[Optional[UserSession]]:
        """
        Hold the user's lock and yield the live session (None if never started).

        Changes made to the yielded object inside the block are the session's
        new state; do not keep a reference after the block exits.
        """
        async with self._locks[user_id]:
            yield self._sessions.get(user_id)
