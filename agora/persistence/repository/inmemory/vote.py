"""In-memory vote repository for testing."""

from typing import Optional, Sequence

from sqlalchemy.exc import IntegrityError

from agora.domain.model.vote import Vote
from agora.domain.repository.vote import VoteRepository
from agora.domain.value import TargetId, TargetKind, UserId, VoteDirection, VoteId


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self) -> None:
        self._votes: list[Vote] = []

    async def find_by_user_and_target(
        self,
        user_id: UserId,
        target_kind: TargetKind,
        target_id: TargetId,
    ) -> Optional[Vote]:
        """Find a vote by user and target."""
        for vote in self._votes:
            if (
                vote.voter_id == user_id
                and vote.target_kind == target_kind
                and vote.target_id == target_id
            ):
                return vote
        return None

    async def find_by_target(
        self, target_kind: TargetKind, target_id: TargetId
    ) -> list[Vote]:
        """Find all votes for a target."""
        return [
            v
            for v in self._votes
            if v.target_kind == target_kind and v.target_id == target_id
        ]

    async def find_by_targets(
        self, target_kind: TargetKind, target_ids: Sequence[TargetId]
    ) -> list[Vote]:
        """Find all votes for several targets (batch query)."""
        if not target_ids:
            return []

        wanted = set(target_ids)
        return [
            v
            for v in self._votes
            if v.target_kind == target_kind and v.target_id in wanted
        ]

    async def save(self, vote: Vote) -> Vote:
        """Save a vote.

        Raises:
            IntegrityError: If vote already exists (duplicate)
        """
        existing = await self.find_by_user_and_target(
            vote.voter_id, vote.target_kind, vote.target_id
        )
        if existing:
            raise IntegrityError("Duplicate vote", None, Exception())

        self._votes.append(vote)
        return vote

    async def update_direction(self, vote_id: VoteId, direction: VoteDirection) -> None:
        """Flip the direction of a vote."""
        self._votes = [
            v.model_copy(update={"direction": direction}) if v.id == vote_id else v
            for v in self._votes
        ]

    async def delete(self, vote_id: VoteId) -> None:
        """Delete a vote by ID."""
        self._votes = [v for v in self._votes if v.id != vote_id]
