"""Unit tests for CommentService."""

import pytest

from agora.domain.error import NotFoundError
from agora.domain.repository import CommentRepository
from agora.domain.service import CommentService
from agora.domain.value import Author, CommentId, ThreadId, UserId
from tests.conftest import make_comment
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()

AUTHOR = Author(id=UserId("author-1"), name="Ada")


class TestCreateComment:
    """Tests for create_comment method."""

    @pytest.mark.asyncio
    async def test_create_top_level_comment(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)

        # Act
        comment = await comment_service.create_comment(
            ThreadId("thread-1"), AUTHOR, "First!"
        )

        # Assert
        assert comment.parent_id is None
        assert comment.author == AUTHOR
        assert await comment_repo.find_by_id(comment.id) == comment

    @pytest.mark.asyncio
    async def test_create_reply(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        await comment_repo.save(make_comment("parent"))

        reply = await comment_service.create_comment(
            ThreadId("thread-1"), AUTHOR, "Agreed", parent_id=CommentId("parent")
        )

        assert reply.parent_id == "parent"

    @pytest.mark.asyncio
    async def test_reply_to_missing_parent_raises(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await comment_service.create_comment(
                ThreadId("thread-1"), AUTHOR, "Hello", parent_id=CommentId("missing")
            )

    @pytest.mark.asyncio
    async def test_reply_to_parent_in_other_thread_raises(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        await comment_repo.save(make_comment("parent", thread_id="thread-2"))

        with pytest.raises(ValueError, match="does not belong"):
            await comment_service.create_comment(
                ThreadId("thread-1"), AUTHOR, "Hello", parent_id=CommentId("parent")
            )


class TestGetComments:
    """Tests for get_comments_for_thread method."""

    @pytest.mark.asyncio
    async def test_returns_only_thread_comments_newest_first(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        await comment_repo.save(make_comment("a", created_minute=1))
        await comment_repo.save(make_comment("b", created_minute=2))
        await comment_repo.save(make_comment("x", thread_id="thread-2"))

        comments = await comment_service.get_comments_for_thread(ThreadId("thread-1"))

        assert [c.id for c in comments] == ["b", "a"]
