"""Domain value objects for Agora.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum

from pydantic import Field

from agora.domain.value.common import ValueObject
from agora.domain.value.identifiers import CommunityId, UserId


class VoteDirection(str, Enum):
    """Direction of a vote."""

    UP = "up"
    DOWN = "down"

    @property
    def weight(self) -> int:
        """Signed contribution of one vote in this direction to a score."""
        return 1 if self is VoteDirection.UP else -1

    @property
    def opposite(self) -> "VoteDirection":
        return VoteDirection.DOWN if self is VoteDirection.UP else VoteDirection.UP


class TargetKind(str, Enum):
    """Type of entity that can be voted on."""

    THREAD = "thread"
    COMMENT = "comment"


class CommentOrder(str, Enum):
    """Ordering of top-level comments and of siblings within a parent."""

    NEWEST_FIRST = "newest"
    OLDEST_FIRST = "oldest"


class RankMode(str, Enum):
    """Thread list ordering modes."""

    NEW = "new"
    TOP = "top"
    COMMENTS = "comments"
    TRENDING = "trending"


class VoteAction(str, Enum):
    """Store operation that realises a vote toggle."""

    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


class Author(ValueObject):
    """Author of a thread or comment, denormalised from the profiles table."""

    id: UserId
    name: str = Field(default="Anonymous", min_length=1, max_length=255)
    avatar_url: str | None = None


class CommunityRef(ValueObject):
    """Reference to the community a thread belongs to."""

    id: CommunityId
    name: str = "Unknown"


class VoteTally(ValueObject):
    """Aggregated votes on one target, as seen by one viewer."""

    score: int = 0
    upvotes: int = Field(default=0, ge=0)
    downvotes: int = Field(default=0, ge=0)
    user_vote: VoteDirection | None = None


class VoteTransition(ValueObject):
    """Outcome of applying the toggle rule to a prior vote state.

    - no prior vote: insert, delta +1 (up) / -1 (down)
    - same direction: delete, delta -1 (up) / +1 (down)
    - opposite direction: update, delta +2 (up) / -2 (down)
    """

    action: VoteAction
    previous: VoteDirection | None
    current: VoteDirection | None
    score_delta: int
