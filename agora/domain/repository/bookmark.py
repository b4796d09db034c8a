"""Bookmark repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from agora.domain.model.bookmark import Bookmark
from agora.domain.value import BookmarkId, ThreadId, UserId


class BookmarkRepository(ABC):
    """Repository for Bookmark entity."""

    @abstractmethod
    async def find_by_user_and_thread(
        self, user_id: UserId, thread_id: ThreadId
    ) -> Optional[Bookmark]:
        """Find a user's bookmark on a thread, if any."""
        pass

    @abstractmethod
    async def find_by_user(self, user_id: UserId) -> List[Bookmark]:
        """Find all bookmarks of a user, newest first."""
        pass

    @abstractmethod
    async def save(self, bookmark: Bookmark) -> Bookmark:
        """Insert a bookmark.

        Raises:
            IntegrityError: If the user already bookmarked the thread
        """
        pass

    @abstractmethod
    async def delete(self, bookmark_id: BookmarkId) -> None:
        """Delete a bookmark."""
        pass
