"""PostgreSQL repository implementations."""

from agora.persistence.repository.bookmark import PostgresBookmarkRepository
from agora.persistence.repository.comment import PostgresCommentRepository
from agora.persistence.repository.thread import PostgresThreadRepository
from agora.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresBookmarkRepository",
    "PostgresCommentRepository",
    "PostgresThreadRepository",
    "PostgresVoteRepository",
]
