"""Thread summary.

Threads themselves are owned by the external thread CRUD collaborator. The
core only ever sees a summary, recomputed on each fetch and used for ranking.
"""

from datetime import datetime

from pydantic import Field

from agora.domain.model.common import DomainModel
from agora.domain.value import Author, CommunityRef, ThreadId


class ThreadSummary(DomainModel):
    """Thread summary used for listing and ranking."""

    id: ThreadId
    title: str = Field(min_length=1, max_length=300)
    excerpt: str = ""
    author: Author
    community: CommunityRef
    score: int = 0
    comment_count: int = Field(default=0, ge=0)
    tags: frozenset[str] = frozenset()
    created_at: datetime = Field(default_factory=datetime.now)
