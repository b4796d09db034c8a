"""List threads use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from agora.config import Settings
from agora.domain.model.thread import ThreadSummary
from agora.domain.service import ThreadRankingEngine, ThreadService
from agora.domain.value import CommunityId, RankMode, UserId


class ThreadListItem(BaseModel):
    """Thread list item in response."""

    thread_id: str
    title: str
    excerpt: str
    author_id: str
    author_name: str
    community_id: str
    community_name: str
    score: int
    comment_count: int
    tags: list[str]
    created_at: datetime

    @classmethod
    def from_domain(cls, thread: ThreadSummary) -> "ThreadListItem":
        return cls(
            thread_id=thread.id,
            title=thread.title,
            excerpt=thread.excerpt,
            author_id=thread.author.id,
            author_name=thread.author.name,
            community_id=thread.community.id,
            community_name=thread.community.name,
            score=thread.score,
            comment_count=thread.comment_count,
            tags=sorted(thread.tags),
            created_at=thread.created_at,
        )


class ListThreadsRequest(BaseModel):
    """List threads request.

    Filters combine; with none set every thread is listed.
    """

    community_id: str | None = None
    author_id: str | None = None
    saved_by: str | None = None  # List threads bookmarked by this user
    mode: RankMode | None = None  # Defaults to the configured ranking mode


class ListThreadsResponse(BaseModel):
    """List threads response."""

    threads: list[ThreadListItem]
    mode: RankMode
    total: int


class ListThreadsUseCase:
    """Use case for fetching and ranking a thread list."""

    def __init__(
        self,
        thread_service: ThreadService,
        ranking_engine: ThreadRankingEngine,
        settings: Settings,
    ) -> None:
        """Initialize list threads use case.

        Args:
            thread_service: Thread summary domain service
            ranking_engine: Thread ranking engine
            settings: Application settings (default ranking mode)
        """
        self.thread_service = thread_service
        self.ranking_engine = ranking_engine
        self.settings = settings

    async def execute(self, request: ListThreadsRequest) -> ListThreadsResponse:
        """Execute list threads flow.

        Args:
            request: List threads request with filters and mode

        Returns:
            Ranked threads

        Raises:
            RemoteOperationError: If the summaries could not be fetched
        """
        mode = request.mode or RankMode(self.settings.ranking.default_mode)
        with logfire.span(
            "list_threads.execute",
            community_id=request.community_id,
            author_id=request.author_id,
            saved_by=request.saved_by,
            mode=mode.value,
        ):
            threads = await self.thread_service.get_thread_summaries(
                community_id=(
                    CommunityId(request.community_id) if request.community_id else None
                ),
                author_id=UserId(request.author_id) if request.author_id else None,
                saved_by=UserId(request.saved_by) if request.saved_by else None,
            )
            ranked = self.ranking_engine.rank(threads, mode)
            return ListThreadsResponse(
                threads=[ThreadListItem.from_domain(thread) for thread in ranked],
                mode=mode,
                total=len(ranked),
            )
