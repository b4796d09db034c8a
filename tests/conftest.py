"""Test configuration and fixtures."""

from datetime import datetime, timedelta
from uuid import uuid4

from agora.domain.model import Comment, ThreadSummary, Vote
from agora.domain.value import (
    Author,
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

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


def at(minutes: int) -> datetime:
    """Timestamp ``minutes`` after a fixed base time."""
    return BASE_TIME + timedelta(minutes=minutes)


def make_comment(
    comment_id: str,
    parent_id: str | None = None,
    created_minute: int = 0,
    thread_id: str = "thread-1",
    author_id: str = "author-1",
    content: str = "A comment",
) -> Comment:
    """Helper to build test comments with readable ids."""
    return Comment(
        id=CommentId(comment_id),
        thread_id=ThreadId(thread_id),
        author=Author(id=UserId(author_id), name="Author"),
        content=content,
        parent_id=CommentId(parent_id) if parent_id else None,
        created_at=at(created_minute),
        updated_at=at(created_minute),
    )


def make_vote(
    target_id: str,
    voter_id: str,
    direction: VoteDirection = VoteDirection.UP,
    kind: TargetKind = TargetKind.COMMENT,
    created_minute: int = 0,
    vote_id: str | None = None,
) -> Vote:
    """Helper to build test votes."""
    return Vote(
        id=VoteId(vote_id or str(uuid4())),
        target_kind=kind,
        target_id=TargetId(target_id),
        voter_id=UserId(voter_id),
        direction=direction,
        created_at=at(created_minute),
    )


def make_thread(
    thread_id: str,
    score: int = 0,
    comment_count: int = 0,
    created_minute: int = 0,
    community_id: str = "community-1",
    author_id: str = "author-1",
) -> ThreadSummary:
    """Helper to build test thread summaries."""
    return ThreadSummary(
        id=ThreadId(thread_id),
        title=f"Thread {thread_id}",
        author=Author(id=UserId(author_id), name="Author"),
        community=CommunityRef(id=CommunityId(community_id), name="Science"),
        score=score,
        comment_count=comment_count,
        created_at=at(created_minute),
    )
