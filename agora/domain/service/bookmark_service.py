"""Bookmark domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from agora.domain.model.bookmark import Bookmark
from agora.domain.repository import BookmarkRepository
from agora.domain.value import BookmarkId, ThreadId, UserId

from .base import Service, remote_operation


class BookmarkService(Service):
    """Domain service for saving threads."""

    def __init__(self, bookmark_repository: BookmarkRepository) -> None:
        self.bookmark_repository = bookmark_repository

    async def toggle_bookmark(self, thread_id: ThreadId, user_id: UserId) -> bool:
        """Save the thread if it is not saved, otherwise unsave it.

        Returns:
            True if the thread is bookmarked afterwards

        Raises:
            RemoteOperationError: If the store fails
        """
        with logfire.span(
            "bookmark_service.toggle_bookmark", thread_id=thread_id, user_id=user_id
        ):
            with remote_operation("toggle_bookmark", thread_id=thread_id):
                existing = await self.bookmark_repository.find_by_user_and_thread(
                    user_id, thread_id
                )
                if existing:
                    await self.bookmark_repository.delete(existing.id)
                    bookmarked = False
                else:
                    await self.bookmark_repository.save(
                        Bookmark(
                            id=BookmarkId(str(uuid4())),
                            thread_id=thread_id,
                            user_id=user_id,
                            created_at=datetime.now(),
                        )
                    )
                    bookmarked = True

            logfire.info("Bookmark toggled", thread_id=thread_id, bookmarked=bookmarked)
            return bookmarked

    async def is_bookmarked(self, thread_id: ThreadId, user_id: UserId) -> bool:
        with remote_operation("get_bookmark", thread_id=thread_id):
            existing = await self.bookmark_repository.find_by_user_and_thread(
                user_id, thread_id
            )
        return existing is not None

    async def get_bookmarked_thread_ids(self, user_id: UserId) -> list[ThreadId]:
        """Threads saved by a user, most recently saved first."""
        with remote_operation("get_bookmarks", user_id=user_id):
            bookmarks = await self.bookmark_repository.find_by_user(user_id)
        return [bookmark.thread_id for bookmark in bookmarks]
