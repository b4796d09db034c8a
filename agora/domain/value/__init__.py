"""Domain value objects for Agora."""

from agora.domain.value.identifiers import (
    BookmarkId,
    CommentId,
    CommunityId,
    TargetId,
    ThreadId,
    UserId,
    VoteId,
)
from agora.domain.value.types import (
    Author,
    CommentOrder,
    CommunityRef,
    RankMode,
    TargetKind,
    VoteAction,
    VoteDirection,
    VoteTally,
    VoteTransition,
)

__all__ = [
    # Identifiers
    "UserId",
    "CommunityId",
    "ThreadId",
    "CommentId",
    "VoteId",
    "BookmarkId",
    "TargetId",
    # Types
    "Author",
    "CommunityRef",
    "CommentOrder",
    "RankMode",
    "TargetKind",
    "VoteAction",
    "VoteDirection",
    "VoteTally",
    "VoteTransition",
]
