"""In-memory bookmark repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from agora.domain.model.bookmark import Bookmark
from agora.domain.repository.bookmark import BookmarkRepository
from agora.domain.value import BookmarkId, ThreadId, UserId


class InMemoryBookmarkRepository(BookmarkRepository):
    """In-memory implementation of BookmarkRepository for testing."""

    def __init__(self) -> None:
        self._bookmarks: dict[BookmarkId, Bookmark] = {}

    async def find_by_user_and_thread(
        self, user_id: UserId, thread_id: ThreadId
    ) -> Optional[Bookmark]:
        for bookmark in self._bookmarks.values():
            if bookmark.user_id == user_id and bookmark.thread_id == thread_id:
                return bookmark
        return None

    async def find_by_user(self, user_id: UserId) -> list[Bookmark]:
        bookmarks = [b for b in self._bookmarks.values() if b.user_id == user_id]
        bookmarks.sort(key=lambda b: b.created_at, reverse=True)
        return bookmarks

    async def save(self, bookmark: Bookmark) -> Bookmark:
        """Save a bookmark.

        Raises:
            IntegrityError: If the user already bookmarked the thread
        """
        if await self.find_by_user_and_thread(bookmark.user_id, bookmark.thread_id):
            raise IntegrityError("Duplicate bookmark", None, Exception())
        self._bookmarks[bookmark.id] = bookmark
        return bookmark

    async def delete(self, bookmark_id: BookmarkId) -> None:
        self._bookmarks.pop(bookmark_id, None)
