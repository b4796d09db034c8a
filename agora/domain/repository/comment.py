"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from agora.domain.model.comment import Comment
from agora.domain.value import CommentId, ThreadId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_thread(self, thread_id: ThreadId) -> List[Comment]:
        """Find all comments for a thread as a flat list.

        Comments are returned newest first; nesting is left to the caller.

        Args:
            thread_id: The thread ID

        Returns:
            Flat list of comments
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Insert a comment.

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

