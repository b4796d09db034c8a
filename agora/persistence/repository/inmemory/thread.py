"""In-memory thread summary repository for testing."""

from typing import Optional, Sequence

from agora.domain.model.thread import ThreadSummary
from agora.domain.repository.thread import ThreadRepository
from agora.domain.value import CommunityId, ThreadId, UserId


class InMemoryThreadRepository(ThreadRepository):
    """In-memory implementation of ThreadRepository for testing.

    Summaries are stored as given; tests set score and comment count directly.
    """

    def __init__(self) -> None:
        self._threads: dict[ThreadId, ThreadSummary] = {}

    def add(self, thread: ThreadSummary) -> ThreadSummary:
        """Store a summary (stands in for the external thread CRUD)."""
        self._threads[thread.id] = thread
        return thread

    async def find_summaries(
        self,
        community_id: Optional[CommunityId] = None,
        author_id: Optional[UserId] = None,
        thread_ids: Optional[Sequence[ThreadId]] = None,
    ) -> list[ThreadSummary]:
        """Find thread summaries, optionally filtered."""
        threads = list(self._threads.values())
        if community_id is not None:
            threads = [t for t in threads if t.community.id == community_id]
        if author_id is not None:
            threads = [t for t in threads if t.author.id == author_id]
        if thread_ids is not None:
            wanted = set(thread_ids)
            threads = [t for t in threads if t.id in wanted]
        return threads
