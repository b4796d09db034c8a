"""Per-entity interaction state for the current viewer."""

from typing import Optional

from agora.domain.model.common import DomainModel
from agora.domain.value import VoteDirection


class InteractionSnapshot(DomainModel):
    """The user-visible part of an interaction state."""

    vote: Optional[VoteDirection] = None
    score: int = 0
    bookmarked: bool = False


class InteractionState(InteractionSnapshot):
    """Interaction state of one entity (thread or comment) in one session.

    ``in_flight`` is set while a mutation awaits the remote store;
    ``last_known_good`` holds the pre-optimistic snapshot to roll back to.
    """

    in_flight: bool = False
    last_known_good: Optional[InteractionSnapshot] = None

    def snapshot(self) -> InteractionSnapshot:
        return InteractionSnapshot(
            vote=self.vote, score=self.score, bookmarked=self.bookmarked
        )
