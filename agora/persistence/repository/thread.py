"""PostgreSQL implementation of the thread summary repository."""

from collections import defaultdict
from typing import List, Optional, Sequence

import logfire
from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from agora.domain.model import ThreadSummary
from agora.domain.repository import ThreadRepository
from agora.domain.value import CommunityId, ThreadId, UserId
from agora.persistence.mappers import row_to_thread_summary
from agora.persistence.tables import (
    comments_table,
    communities_table,
    profiles_table,
    tags_table,
    thread_tags_table,
    threads_table,
    votes_table,
)


class PostgresThreadRepository(ThreadRepository):
    """PostgreSQL implementation of ThreadRepository.

    Score and comment count are derived on every fetch; nothing is cached in
    the threads table.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _fetch_tags_for_threads(
        self, thread_ids: list[str]
    ) -> dict[str, list[str]]:
        """Fetch tags for multiple threads in a single query.

        Args:
            thread_ids: List of thread IDs

        Returns:
            Dict mapping thread_id -> list of tag names
        """
        if not thread_ids:
            return {}

        stmt = (
            select(thread_tags_table.c.thread_id, tags_table.c.name)
            .select_from(thread_tags_table)
            .join(tags_table, thread_tags_table.c.tag_id == tags_table.c.id)
            .where(thread_tags_table.c.thread_id.in_(thread_ids))
        )
        result = await self.session.execute(stmt)

        thread_tag_map: dict[str, list[str]] = defaultdict(list)
        for row in result.fetchall():
            thread_tag_map[str(row.thread_id)].append(row.name)
        return thread_tag_map

    async def find_summaries(
        self,
        community_id: Optional[CommunityId] = None,
        author_id: Optional[UserId] = None,
        thread_ids: Optional[Sequence[ThreadId]] = None,
    ) -> List[ThreadSummary]:
        """Find thread summaries, optionally filtered."""
        with logfire.span(
            "thread_repository.find_summaries",
            community_id=community_id,
            author_id=author_id,
            thread_ids=len(thread_ids) if thread_ids is not None else None,
        ):
            if thread_ids is not None and not thread_ids:
                return []

            score = (
                select(
                    votes_table.c.target_id.label("thread_id"),
                    func.sum(
                        case((votes_table.c.vote_type == "up", 1), else_=-1)
                    ).label("score"),
                )
                .where(votes_table.c.target_kind == "thread")
                .group_by(votes_table.c.target_id)
                .subquery()
            )
            comment_count = (
                select(
                    comments_table.c.thread_id,
                    func.count().label("comment_count"),
                )
                .group_by(comments_table.c.thread_id)
                .subquery()
            )

            stmt = (
                select(
                    threads_table,
                    profiles_table.c.username,
                    profiles_table.c.avatar_url,
                    communities_table.c.name.label("community_name"),
                    func.coalesce(score.c.score, 0).label("score"),
                    func.coalesce(comment_count.c.comment_count, 0).label(
                        "comment_count"
                    ),
                )
                .select_from(threads_table)
                .outerjoin(profiles_table, threads_table.c.user_id == profiles_table.c.id)
                .outerjoin(
                    communities_table,
                    threads_table.c.community_id == communities_table.c.id,
                )
                .outerjoin(score, threads_table.c.id == score.c.thread_id)
                .outerjoin(comment_count, threads_table.c.id == comment_count.c.thread_id)
            )
            if community_id is not None:
                stmt = stmt.where(threads_table.c.community_id == community_id)
            if author_id is not None:
                stmt = stmt.where(threads_table.c.user_id == author_id)
            if thread_ids is not None:
                stmt = stmt.where(threads_table.c.id.in_(thread_ids))

            result = await self.session.execute(stmt)
            rows = [row._asdict() for row in result.fetchall()]

            tag_map = await self._fetch_tags_for_threads([str(r["id"]) for r in rows])
            return [
                row_to_thread_summary(row, tag_names=tag_map.get(str(row["id"]), []))
                for row in rows
            ]
