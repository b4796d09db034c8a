"""PostgreSQL implementation of Comment repository."""

from typing import List, Optional

import logfire
from sqlalchemy import desc, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.model import Comment
from agora.domain.repository import CommentRepository
from agora.domain.value import CommentId, ThreadId
from agora.persistence.mappers import comment_to_dict, row_to_comment
from agora.persistence.tables import comments_table, profiles_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _select_with_author(self):
        return select(
            comments_table,
            profiles_table.c.username,
            profiles_table.c.avatar_url,
        ).select_from(
            comments_table.outerjoin(
                profiles_table, comments_table.c.user_id == profiles_table.c.id
            )
        )

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = self._select_with_author().where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_thread(self, thread_id: ThreadId) -> List[Comment]:
        """Find all comments for a thread, newest first."""
        with logfire.span("comment_repository.find_by_thread", thread_id=thread_id):
            stmt = (
                self._select_with_author()
                .where(comments_table.c.thread_id == thread_id)
                .order_by(desc(comments_table.c.created_at))
            )
            result = await self.session.execute(stmt)
            return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create)."""
        stmt = insert(comments_table).values(**comment_to_dict(comment))
        await self.session.execute(stmt)
        await self.session.flush()
        return comment
