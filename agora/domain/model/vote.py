"""Vote entity.

Votes are up or down, on a thread or a comment. Each user can hold at most
one vote per target.
"""

from datetime import datetime

from pydantic import Field

from agora.domain.model.common import DomainModel
from agora.domain.value import TargetId, TargetKind, UserId, VoteDirection, VoteId


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per (voter, target kind, target), enforced by the store's
      unique constraint and by aggregation
    - Re-voting follows the toggle rule: same direction removes the vote,
      opposite direction flips it
    - Polymorphic reference to the target (thread or comment)
    """

    id: VoteId
    target_kind: TargetKind
    target_id: TargetId
    voter_id: UserId
    direction: VoteDirection
    created_at: datetime = Field(default_factory=datetime.now)
