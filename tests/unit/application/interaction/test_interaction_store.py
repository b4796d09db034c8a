"""Unit tests for InteractionStateStore."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from agora.application.interaction import InteractionStateStore, ViewScope
from agora.domain.error import (
    AuthRequiredError,
    MutationInFlightError,
    RemoteOperationError,
)
from agora.domain.service import BookmarkService, VoteService, resolve_transition
from agora.domain.value import TargetKind, ThreadId, UserId, VoteDirection
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()

UP = VoteDirection.UP
DOWN = VoteDirection.DOWN
COMMENT = TargetKind.COMMENT
THREAD = TargetKind.THREAD
USER = UserId("user-1")


def make_store(user_id=USER, scope=None):
    """Store over mocked services, for failure and timing scenarios."""
    vote_service = AsyncMock(spec=VoteService)
    bookmark_service = AsyncMock(spec=BookmarkService)
    store = InteractionStateStore(vote_service, bookmark_service, user_id, scope)
    return store, vote_service, bookmark_service


def gated(result_factory):
    """Remote call that blocks until the returned event is set."""
    gate = asyncio.Event()

    async def call(*args):
        await gate.wait()
        return result_factory(*args)

    return gate, call


class TestApplyVote:
    """Tests for apply_vote against the in-memory store."""

    @pytest.mark.asyncio
    async def test_vote_toggle_round_trip(self, unit_env):
        """up, up returns to no vote; down then up lands on up with +2."""
        store = InteractionStateStore(
            await unit_env.get(VoteService), await unit_env.get(BookmarkService), USER
        )
        store.seed(COMMENT, "c1", score=4)

        state = await store.apply_vote(COMMENT, "c1", UP)
        assert (state.vote, state.score) == (UP, 5)

        state = await store.apply_vote(COMMENT, "c1", UP)
        assert (state.vote, state.score) == (None, 4)

        state = await store.apply_vote(COMMENT, "c1", DOWN)
        assert (state.vote, state.score) == (DOWN, 3)

        state = await store.apply_vote(COMMENT, "c1", UP)
        assert (state.vote, state.score) == (UP, 5)
        assert state.in_flight is False
        assert state.last_known_good is None

    @pytest.mark.asyncio
    async def test_signed_out_vote_fails_fast(self):
        store, vote_service, _ = make_store(user_id=None)
        store.seed(COMMENT, "c1", score=2)

        with pytest.raises(AuthRequiredError):
            await store.apply_vote(COMMENT, "c1", UP)

        vote_service.cast_vote.assert_not_called()
        assert store.get_state(COMMENT, "c1").score == 2

    @pytest.mark.asyncio
    async def test_remote_failure_rolls_back(self):
        store, vote_service, _ = make_store()
        store.seed(COMMENT, "c1", score=7, vote=DOWN)
        vote_service.cast_vote.side_effect = RemoteOperationError("cast_vote", "network")

        with pytest.raises(RemoteOperationError):
            await store.apply_vote(COMMENT, "c1", UP)

        state = store.get_state(COMMENT, "c1")
        assert (state.vote, state.score, state.in_flight) == (DOWN, 7, False)

    @pytest.mark.asyncio
    async def test_unexpected_failure_is_wrapped_and_rolled_back(self):
        store, vote_service, _ = make_store()
        vote_service.cast_vote.side_effect = ConnectionError("reset")

        with pytest.raises(RemoteOperationError) as exc_info:
            await store.apply_vote(COMMENT, "c1", UP)

        assert isinstance(exc_info.value.__cause__, ConnectionError)
        assert store.get_state(COMMENT, "c1").vote is None
        assert store.get_state(COMMENT, "c1").score == 0

    @pytest.mark.asyncio
    async def test_optimistic_state_visible_while_in_flight(self):
        store, vote_service, _ = make_store()
        gate, call = gated(lambda kind, target, user, direction: resolve_transition(None, direction))
        vote_service.cast_vote.side_effect = call

        task = asyncio.create_task(store.apply_vote(COMMENT, "c1", UP))
        await asyncio.sleep(0)

        pending = store.get_state(COMMENT, "c1")
        assert (pending.vote, pending.score, pending.in_flight) == (UP, 1, True)
        assert pending.last_known_good.score == 0

        gate.set()
        settled = await task
        assert (settled.vote, settled.score, settled.in_flight) == (UP, 1, False)

    @pytest.mark.asyncio
    async def test_second_mutation_while_in_flight_is_rejected(self):
        store, vote_service, _ = make_store()
        gate, call = gated(lambda kind, target, user, direction: resolve_transition(None, direction))
        vote_service.cast_vote.side_effect = call

        task = asyncio.create_task(store.apply_vote(COMMENT, "c1", UP))
        await asyncio.sleep(0)

        with pytest.raises(MutationInFlightError):
            await store.apply_vote(COMMENT, "c1", DOWN)

        gate.set()
        state = await task
        assert state.vote is UP
        assert vote_service.cast_vote.await_count == 1

    @pytest.mark.asyncio
    async def test_other_entities_are_independent(self):
        store, vote_service, _ = make_store()
        gate, call = gated(lambda kind, target, user, direction: resolve_transition(None, direction))
        vote_service.cast_vote.side_effect = call

        first = asyncio.create_task(store.apply_vote(COMMENT, "c1", UP))
        second = asyncio.create_task(store.apply_vote(COMMENT, "c2", DOWN))
        await asyncio.sleep(0)
        gate.set()

        assert (await first).vote is UP
        assert (await second).vote is DOWN

    @pytest.mark.asyncio
    async def test_reconciles_with_remote_state(self):
        """If the remote had a different prior vote, its transition wins."""
        store, vote_service, _ = make_store()
        store.seed(COMMENT, "c1", score=3, vote=None)
        # Remote already held an UP vote, so the click removes it
        vote_service.cast_vote.return_value = resolve_transition(UP, UP)

        state = await store.apply_vote(COMMENT, "c1", UP)

        assert state.vote is None
        assert state.score == 2

    @pytest.mark.asyncio
    async def test_cancelled_mutation_rolls_back_and_unlocks(self):
        store, vote_service, _ = make_store()
        store.seed(COMMENT, "c1", score=4)
        _, call = gated(lambda kind, target, user, direction: resolve_transition(None, direction))
        vote_service.cast_vote.side_effect = call

        task = asyncio.create_task(store.apply_vote(COMMENT, "c1", UP))
        await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        state = store.get_state(COMMENT, "c1")
        assert (state.vote, state.score, state.in_flight) == (None, 4, False)
        assert state.last_known_good is None

        vote_service.cast_vote.side_effect = None
        vote_service.cast_vote.return_value = resolve_transition(None, DOWN)
        state = await store.apply_vote(COMMENT, "c1", DOWN)
        assert (state.vote, state.score) == (DOWN, 3)

    @pytest.mark.asyncio
    async def test_timed_out_mutation_rolls_back(self):
        store, vote_service, _ = make_store()
        _, call = gated(lambda kind, target, user, direction: resolve_transition(None, direction))
        vote_service.cast_vote.side_effect = call

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(store.apply_vote(COMMENT, "c1", UP), timeout=0.01)

        state = store.get_state(COMMENT, "c1")
        assert (state.vote, state.score, state.in_flight) == (None, 0, False)


class TestLiveness:
    """Results arriving after the view or user is gone are discarded."""

    @pytest.mark.asyncio
    async def test_result_after_scope_close_is_discarded(self):
        scope = ViewScope("thread-page")
        store, vote_service, _ = make_store(scope=scope)
        gate, call = gated(lambda kind, target, user, direction: resolve_transition(None, direction))
        vote_service.cast_vote.side_effect = call

        task = asyncio.create_task(store.apply_vote(COMMENT, "c1", UP))
        await asyncio.sleep(0)
        before = store.get_state(COMMENT, "c1")
        scope.close()
        gate.set()
        await task

        assert store.get_state(COMMENT, "c1") == before

    @pytest.mark.asyncio
    async def test_failure_after_scope_close_is_discarded(self):
        scope = ViewScope()
        store, vote_service, _ = make_store(scope=scope)

        async def fail(*args):
            scope.close()
            raise RemoteOperationError("cast_vote")

        vote_service.cast_vote.side_effect = fail

        await store.apply_vote(COMMENT, "c1", UP)

        assert store.get_state(COMMENT, "c1").in_flight is True

    @pytest.mark.asyncio
    async def test_result_after_user_switch_is_discarded(self):
        store, vote_service, _ = make_store()
        gate, call = gated(lambda kind, target, user, direction: resolve_transition(None, direction))
        vote_service.cast_vote.side_effect = call

        task = asyncio.create_task(store.apply_vote(COMMENT, "c1", UP))
        await asyncio.sleep(0)
        store.switch_user(UserId("user-2"))
        gate.set()
        await task

        state = store.get_state(COMMENT, "c1")
        assert (state.vote, state.score, state.in_flight) == (None, 0, False)

    def test_switch_user_clears_state(self):
        store, _, _ = make_store()
        store.seed(THREAD, "t1", score=5, vote=UP, bookmarked=True)

        store.switch_user(None)

        assert store.get_state(THREAD, "t1").score == 0
        assert store.get_state(THREAD, "t1").bookmarked is False

    def test_switch_to_same_user_keeps_state(self):
        store, _, _ = make_store()
        store.seed(THREAD, "t1", score=5)

        store.switch_user(USER)

        assert store.get_state(THREAD, "t1").score == 5


class TestToggleBookmark:
    """Tests for toggle_bookmark."""

    @pytest.mark.asyncio
    async def test_toggle_against_in_memory_store(self, unit_env):
        store = InteractionStateStore(
            await unit_env.get(VoteService), await unit_env.get(BookmarkService), USER
        )

        assert await store.toggle_bookmark(ThreadId("t1")) is True
        assert store.get_state(THREAD, "t1").bookmarked is True
        assert await store.toggle_bookmark(ThreadId("t1")) is False
        assert store.get_state(THREAD, "t1").bookmarked is False

    @pytest.mark.asyncio
    async def test_signed_out_bookmark_fails_fast(self):
        store, _, bookmark_service = make_store(user_id=None)

        with pytest.raises(AuthRequiredError):
            await store.toggle_bookmark(ThreadId("t1"))

        bookmark_service.toggle_bookmark.assert_not_called()

    @pytest.mark.asyncio
    async def test_failure_rolls_back_bookmark(self):
        store, _, bookmark_service = make_store()
        store.seed(THREAD, "t1", score=3, bookmarked=True)
        bookmark_service.toggle_bookmark.side_effect = RemoteOperationError(
            "toggle_bookmark"
        )

        with pytest.raises(RemoteOperationError):
            await store.toggle_bookmark(ThreadId("t1"))

        state = store.get_state(THREAD, "t1")
        assert (state.bookmarked, state.score, state.in_flight) == (True, 3, False)

    def test_seed_does_not_overwrite_pending_mutation(self):
        store, _, _ = make_store()
        store.seed(THREAD, "t1", score=1)
        store._states[(THREAD, "t1")] = store.get_state(THREAD, "t1").model_copy(
            update={"in_flight": True}
        )

        state = store.seed(THREAD, "t1", score=99)

        assert state.score == 1

    @pytest.mark.asyncio
    async def test_pending_bookmark_blocks_thread_vote_and_back(self):
        """A thread's vote and bookmark share one in-flight flag."""
        store, vote_service, bookmark_service = make_store()
        gate, call = gated(lambda thread_id, user_id: True)
        bookmark_service.toggle_bookmark.side_effect = call

        task = asyncio.create_task(store.toggle_bookmark(ThreadId("t1")))
        await asyncio.sleep(0)

        with pytest.raises(MutationInFlightError):
            await store.apply_vote(THREAD, "t1", UP)
        vote_service.cast_vote.assert_not_called()

        gate.set()
        assert await task is True

        vote_gate, vote_call = gated(
            lambda kind, target, user, direction: resolve_transition(None, direction)
        )
        vote_service.cast_vote.side_effect = vote_call
        vote_task = asyncio.create_task(store.apply_vote(THREAD, "t1", UP))
        await asyncio.sleep(0)

        with pytest.raises(MutationInFlightError):
            await store.toggle_bookmark(ThreadId("t1"))

        vote_gate.set()
        state = await vote_task
        assert (state.vote, state.score, state.bookmarked) == (UP, 1, True)
        assert bookmark_service.toggle_bookmark.await_count == 1
