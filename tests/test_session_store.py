import asyncio

from quizbot.services.session_store import SessionStore

from conftest import run


def test_unknown_user_has_no_session(store):
    assert store.get(1) is None


def test_reset_creates_and_overwrites(store):
    async def _test():
        first = await store.reset(1)
        assert (first.current_question, first.score, first.active) == (0, 0, True)
        assert first.generation == 1

        async with store.locked(1) as session:
            session.current_question = 3
            session.score = 2

        second = await store.reset(1)
        assert (second.current_question, second.score, second.active) == (0, 0, True)
        assert second.generation == 2
        assert store.get(1).generation == 2

    run(_test())


def test_get_returns_detached_copy(store):
    async def _test():
        await store.reset(1)
        copy = store.get(1)
        copy.score = 5
        assert store.get(1).score == 0

    run(_test())


def test_locked_yields_none_for_unknown_user(store):
    async def _test():
        async with store.locked(42) as session:
            assert session is None

    run(_test())


def test_same_user_updates_do_not_interleave():
    store = SessionStore()
    events = []

    async def bump(name: str):
        async with store.locked(1) as session:
            events.append(f"{name}:read")
            seen = session.score
            await asyncio.sleep(0.01)
            session.score = seen + 1
            events.append(f"{name}:write")

    async def _test():
        await store.reset(1)
        await asyncio.gather(bump("a"), bump("b"))

    run(_test())
    assert store.get(1).score == 2
    assert events in (
        ["a:read", "a:write", "b:read", "b:write"],
        ["b:read", "b:write", "a:read", "a:write"],
    )


def test_users_do_not_contend():
    store = SessionStore()

    async def _test():
        await store.reset(1)
        await store.reset(2)
        async with store.locked(1):
            async with store.locked(2) as other:
                other.score = 1
            # Holding user 1 never blocks user 2
            await asyncio.wait_for(store.reset(2), timeout=1)

    run(_test())
    assert store.get(2).score == 0
    assert store.get(2).generation == 2
