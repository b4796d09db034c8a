"""Domain model entities for Agora."""

from agora.domain.model.bookmark import Bookmark
from agora.domain.model.comment import Comment
from agora.domain.model.interaction import InteractionSnapshot, InteractionState
from agora.domain.model.thread import ThreadSummary
from agora.domain.model.vote import Vote

__all__ = [
    "Bookmark",
    "Comment",
    "InteractionSnapshot",
    "InteractionState",
    "ThreadSummary",
    "Vote",
]
