"""Thread summary repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from agora.domain.model.thread import ThreadSummary
from agora.domain.value import CommunityId, ThreadId, UserId


class ThreadRepository(ABC):
    """Read-only access to thread summaries.

    Thread creation and editing belong to an external collaborator; the core
    only reads summaries (with score and comment count already derived) for
    ranking.
    """

    @abstractmethod
    async def find_summaries(
        self,
        community_id: Optional[CommunityId] = None,
        author_id: Optional[UserId] = None,
        thread_ids: Optional[Sequence[ThreadId]] = None,
    ) -> List[ThreadSummary]:
        """Find thread summaries, optionally filtered.

        Args:
            community_id: Only threads in this community
            author_id: Only threads by this author
            thread_ids: Only these threads (e.g. a user's bookmarks)

        Returns:
            Thread summaries in no guaranteed order
        """
        pass
