"""Comment entity.

Comments are threaded discussions on a thread. The store keeps them as a flat
relation with a nullable self-reference; nesting is reconstructed in memory by
the comment tree builder.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from agora.domain.model.common import DomainModel
from agora.domain.value import Author, CommentId, ThreadId


class Comment(DomainModel):
    """Comment entity.

    Represents a comment on a thread or a reply to another comment.

    Threading is managed through parent_id only (None for top-level). A
    non-null parent must belong to the same thread, and a comment may never
    be its own ancestor.
    """

    id: CommentId
    thread_id: ThreadId
    author: Author
    content: str = Field(min_length=1, max_length=10000)
    parent_id: Optional[CommentId] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_top_level(self) -> bool:
        return self.parent_id is None
