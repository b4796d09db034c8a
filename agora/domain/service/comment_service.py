"""Comment domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from agora.domain.error import NotFoundError
from agora.domain.model.comment import Comment
from agora.domain.repository import CommentRepository
from agora.domain.value import Author, CommentId, ThreadId

from .base import Service, remote_operation


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(self, comment_repository: CommentRepository) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
        """
        self.comment_repository = comment_repository

    async def create_comment(
        self,
        thread_id: ThreadId,
        author: Author,
        content: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Create a comment on a thread or reply to another comment.

        Args:
            thread_id: Thread ID
            author: Comment author
            content: Comment text
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment

        Raises:
            NotFoundError: If the parent comment does not exist
            ValueError: If the parent belongs to another thread
            RemoteOperationError: If the store fails
        """
        with logfire.span(
            "comment_service.create_comment",
            thread_id=thread_id,
            author_id=author.id,
            parent_id=parent_id,
        ):
            with remote_operation("create_comment", thread_id=thread_id):
                if parent_id:
                    parent = await self.comment_repository.find_by_id(parent_id)
                    if not parent:
                        logfire.error(
                            "Parent comment not found",
                            parent_id=parent_id,
                            thread_id=thread_id,
                        )
                        raise NotFoundError("Comment", parent_id)
                    if parent.thread_id != thread_id:
                        logfire.error(
                            "Parent comment does not belong to thread",
                            parent_id=parent_id,
                            parent_thread_id=parent.thread_id,
                            target_thread_id=thread_id,
                        )
                        raise ValueError("Parent comment does not belong to this thread")

                now = datetime.now()
                comment = Comment(
                    id=CommentId(str(uuid4())),
                    thread_id=thread_id,
                    author=author,
                    content=content,
                    parent_id=parent_id,
                    created_at=now,
                    updated_at=now,
                )
                saved = await self.comment_repository.save(comment)

            logfire.info(
                "Comment created",
                comment_id=saved.id,
                thread_id=thread_id,
                is_reply=parent_id is not None,
            )
            return saved

    async def get_comments_for_thread(self, thread_id: ThreadId) -> list[Comment]:
        """Get all comments for a thread as a flat list.

        Args:
            thread_id: Thread ID

        Returns:
            Comments, newest first
        """
        with logfire.span("comment_service.get_comments_for_thread", thread_id=thread_id):
            with remote_operation("get_comments", thread_id=thread_id):
                comments = await self.comment_repository.find_by_thread(thread_id)
            logfire.info(
                "Comments retrieved for thread",
                thread_id=thread_id,
                count=len(comments),
            )
            return comments
