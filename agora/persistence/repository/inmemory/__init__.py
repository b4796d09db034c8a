"""In-memory repository implementations for testing."""

from .bookmark import InMemoryBookmarkRepository
from .comment import InMemoryCommentRepository
from .thread import InMemoryThreadRepository
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryBookmarkRepository",
    "InMemoryCommentRepository",
    "InMemoryThreadRepository",
    "InMemoryVoteRepository",
]
