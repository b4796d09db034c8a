"""PostgreSQL implementation of Bookmark repository."""

from typing import List, Optional

from sqlalchemy import and_, delete, desc, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.model import Bookmark
from agora.domain.repository import BookmarkRepository
from agora.domain.value import BookmarkId, ThreadId, UserId
from agora.persistence.mappers import bookmark_to_dict, row_to_bookmark
from agora.persistence.tables import bookmarks_table


class PostgresBookmarkRepository(BookmarkRepository):
    """PostgreSQL implementation of BookmarkRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_user_and_thread(
        self, user_id: UserId, thread_id: ThreadId
    ) -> Optional[Bookmark]:
        stmt = select(bookmarks_table).where(
            and_(
                bookmarks_table.c.user_id == user_id,
                bookmarks_table.c.thread_id == thread_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_bookmark(row._asdict()) if row else None

    async def find_by_user(self, user_id: UserId) -> List[Bookmark]:
        stmt = (
            select(bookmarks_table)
            .where(bookmarks_table.c.user_id == user_id)
            .order_by(desc(bookmarks_table.c.created_at))
        )
        result = await self.session.execute(stmt)
        return [row_to_bookmark(row._asdict()) for row in result.fetchall()]

    async def save(self, bookmark: Bookmark) -> Bookmark:
        stmt = insert(bookmarks_table).values(**bookmark_to_dict(bookmark))
        await self.session.execute(stmt)
        await self.session.flush()
        return bookmark

    async def delete(self, bookmark_id: BookmarkId) -> None:
        stmt = delete(bookmarks_table).where(bookmarks_table.c.id == bookmark_id)
        await self.session.execute(stmt)
        await self.session.flush()
