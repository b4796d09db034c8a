"""Bookmark entity."""

from datetime import datetime

from pydantic import Field

from agora.domain.model.common import DomainModel
from agora.domain.value import BookmarkId, ThreadId, UserId


class Bookmark(DomainModel):
    """A thread saved by a user. At most one per (user, thread)."""

    id: BookmarkId
    thread_id: ThreadId
    user_id: UserId
    created_at: datetime = Field(default_factory=datetime.now)
