"""Thread summary domain service."""

import logfire

from agora.domain.model.thread import ThreadSummary
from agora.domain.repository import ThreadRepository
from agora.domain.value import CommunityId, UserId

from .base import Service, remote_operation
from .bookmark_service import BookmarkService


class ThreadService(Service):
    """Domain service for reading thread summaries."""

    def __init__(
        self,
        thread_repository: ThreadRepository,
        bookmark_service: BookmarkService,
    ) -> None:
        """Initialize thread service.

        Args:
            thread_repository: Thread summary repository
            bookmark_service: Bookmark service, for saved-thread listings
        """
        self.thread_repository = thread_repository
        self.bookmark_service = bookmark_service

    async def get_thread_summaries(
        self,
        community_id: CommunityId | None = None,
        author_id: UserId | None = None,
        saved_by: UserId | None = None,
    ) -> list[ThreadSummary]:
        """Fetch thread summaries for a list view.

        Args:
            community_id: Only threads in this community
            author_id: Only threads by this author
            saved_by: Only threads bookmarked by this user

        Returns:
            Unordered thread summaries
        """
        with logfire.span(
            "thread_service.get_thread_summaries",
            community_id=community_id,
            author_id=author_id,
            saved_by=saved_by,
        ):
            thread_ids = None
            if saved_by is not None:
                thread_ids = await self.bookmark_service.get_bookmarked_thread_ids(
                    saved_by
                )
                if not thread_ids:
                    return []

            with remote_operation("get_threads"):
                threads = await self.thread_repository.find_summaries(
                    community_id=community_id,
                    author_id=author_id,
                    thread_ids=thread_ids,
                )
            logfire.info("Thread summaries retrieved", count=len(threads))
            return threads
