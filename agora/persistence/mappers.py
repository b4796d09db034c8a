"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Iterable

from agora.domain.model import Bookmark, Comment, ThreadSummary, Vote
from agora.domain.value import (
    Author,
    BookmarkId,
    CommentId,
    CommunityId,
    CommunityRef,
    TargetId,
    TargetKind,
    ThreadId,
    UserId,
    VoteDirection,
    VoteId,
)

EXCERPT_LENGTH = 200


def _author(row: Dict[str, Any]) -> Author:
    # Profiles may be missing a username; the model's default covers it
    fields: Dict[str, Any] = {
        "id": UserId(str(row["user_id"])),
        "avatar_url": row.get("avatar_url"),
    }
    if row.get("username"):
        fields["name"] = row["username"]
    return Author(**fields)


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert a comment row joined with its author's profile.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(str(row["id"])),
        thread_id=ThreadId(str(row["thread_id"])),
        author=_author(row),
        content=row["content"],
        parent_id=CommentId(str(row["parent_id"])) if row.get("parent_id") else None,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion
    """
    return {
        "id": comment.id,
        "thread_id": comment.thread_id,
        "parent_id": comment.parent_id,
        "user_id": comment.author.id,
        "content": comment.content,
        "created_at": comment.created_at,
        "updated_at": comment.updated_at,
    }


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model."""
    return Vote(
        id=VoteId(str(row["id"])),
        target_kind=TargetKind(row["target_kind"]),
        target_id=TargetId(str(row["target_id"])),
        voter_id=UserId(str(row["user_id"])),
        direction=VoteDirection(row["vote_type"]),
        created_at=row["created_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict."""
    return {
        "id": vote.id,
        "user_id": vote.voter_id,
        "target_kind": vote.target_kind.value,
        "target_id": vote.target_id,
        "vote_type": vote.direction.value,
        "created_at": vote.created_at,
    }


def row_to_bookmark(row: Dict[str, Any]) -> Bookmark:
    return Bookmark(
        id=BookmarkId(str(row["id"])),
        thread_id=ThreadId(str(row["thread_id"])),
        user_id=UserId(str(row["user_id"])),
        created_at=row["created_at"],
    )


def bookmark_to_dict(bookmark: Bookmark) -> Dict[str, Any]:
    return {
        "id": bookmark.id,
        "thread_id": bookmark.thread_id,
        "user_id": bookmark.user_id,
        "created_at": bookmark.created_at,
    }


def row_to_thread_summary(
    row: Dict[str, Any], tag_names: Iterable[str] = ()
) -> ThreadSummary:
    """Convert a thread row with joined profile, community and aggregates.

    Args:
        row: Database row as dict, with ``score`` and ``comment_count`` columns
        tag_names: Names of the thread's tags

    Returns:
        ThreadSummary domain model
    """
    content = row.get("content") or ""
    return ThreadSummary(
        id=ThreadId(str(row["id"])),
        title=row["title"],
        excerpt=content[:EXCERPT_LENGTH],
        author=_author(row),
        community=CommunityRef(
            id=CommunityId(str(row["community_id"])),
            name=row.get("community_name") or "Unknown",
        ),
        score=int(row.get("score") or 0),
        comment_count=int(row.get("comment_count") or 0),
        tags=frozenset(tag_names),
        created_at=row["created_at"],
    )
