"""Unit tests for VoteService."""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from agora.domain.error import RemoteOperationError
from agora.domain.repository import VoteRepository
from agora.domain.service import VoteAggregator, VoteService
from agora.domain.value import (
    CommentId,
    TargetId,
    TargetKind,
    UserId,
    VoteAction,
    VoteDirection,
)
from tests.conftest import make_vote
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()

THREAD = TargetKind.THREAD
TARGET = TargetId("thread-1")
USER = UserId("user-1")


class TestCastVote:
    """Tests for cast_vote method."""

    @pytest.mark.asyncio
    async def test_first_vote_inserts(self, unit_env):
        """A first click stores a vote in that direction."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)

        # Act
        transition = await vote_service.cast_vote(THREAD, TARGET, USER, VoteDirection.UP)

        # Assert
        assert transition.action is VoteAction.INSERT
        assert transition.score_delta == 1
        saved = await vote_repo.find_by_user_and_target(USER, THREAD, TARGET)
        assert saved is not None
        assert saved.direction is VoteDirection.UP

    @pytest.mark.asyncio
    async def test_same_direction_removes_vote(self, unit_env):
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        await vote_service.cast_vote(THREAD, TARGET, USER, VoteDirection.UP)

        # Act
        transition = await vote_service.cast_vote(THREAD, TARGET, USER, VoteDirection.UP)

        # Assert
        assert transition.action is VoteAction.DELETE
        assert transition.current is None
        assert await vote_repo.find_by_user_and_target(USER, THREAD, TARGET) is None

    @pytest.mark.asyncio
    async def test_opposite_direction_flips_vote(self, unit_env):
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        await vote_service.cast_vote(THREAD, TARGET, USER, VoteDirection.DOWN)

        # Act
        transition = await vote_service.cast_vote(THREAD, TARGET, USER, VoteDirection.UP)

        # Assert
        assert transition.action is VoteAction.UPDATE
        assert transition.score_delta == 2
        votes = await vote_repo.find_by_target(THREAD, TARGET)
        assert len(votes) == 1
        assert votes[0].direction is VoteDirection.UP

    @pytest.mark.asyncio
    async def test_repeated_clicks_never_create_second_vote(self, unit_env):
        """At most one vote per user and target, whatever the click sequence."""
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        clicks = [VoteDirection.UP, VoteDirection.DOWN, VoteDirection.DOWN,
                  VoteDirection.UP, VoteDirection.UP, VoteDirection.DOWN]

        for direction in clicks:
            await vote_service.cast_vote(THREAD, TARGET, USER, direction)
            assert len(await vote_repo.find_by_target(THREAD, TARGET)) <= 1

    @pytest.mark.asyncio
    async def test_store_failure_becomes_remote_operation_error(self):
        repository = AsyncMock(spec=VoteRepository)
        repository.find_by_user_and_target.side_effect = OperationalError(
            "select", {}, Exception("connection refused")
        )
        vote_service = VoteService(repository, VoteAggregator())

        with pytest.raises(RemoteOperationError) as exc_info:
            await vote_service.cast_vote(THREAD, TARGET, USER, VoteDirection.UP)

        assert exc_info.value.operation == "cast_vote"


class TestReads:
    """Tests for tally and batched vote reads."""

    @pytest.mark.asyncio
    async def test_get_tally_aggregates_votes(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        await vote_service.cast_vote(THREAD, TARGET, USER, VoteDirection.UP)
        await vote_service.cast_vote(THREAD, TARGET, UserId("user-2"), VoteDirection.UP)

        tally = await vote_service.get_tally(THREAD, TARGET, viewer_id=USER)

        assert tally.score == 2
        assert tally.user_vote is VoteDirection.UP

    @pytest.mark.asyncio
    async def test_get_votes_for_comments_groups_by_comment(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        await vote_repo.save(make_vote("c1", "u1"))
        await vote_repo.save(make_vote("c1", "u2"))
        await vote_repo.save(make_vote("c2", "u1"))
        await vote_repo.save(make_vote("c3", "u1", kind=THREAD))

        grouped = await vote_service.get_votes_for_comments(
            [CommentId("c1"), CommentId("c2"), CommentId("c3")]
        )

        assert len(grouped[CommentId("c1")]) == 2
        assert len(grouped[CommentId("c2")]) == 1
        assert CommentId("c3") not in grouped

    @pytest.mark.asyncio
    async def test_get_votes_for_no_comments_skips_query(self, unit_env):
        vote_service = await unit_env.get(VoteService)

        assert await vote_service.get_votes_for_comments([]) == {}
