"""Repository interfaces for the Agora domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from agora.domain.repository.bookmark import BookmarkRepository
from agora.domain.repository.comment import CommentRepository
from agora.domain.repository.thread import ThreadRepository
from agora.domain.repository.vote import VoteRepository

__all__ = [
    "BookmarkRepository",
    "CommentRepository",
    "ThreadRepository",
    "VoteRepository",
]
