"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from agora.domain.model.vote import Vote
from agora.domain.value import TargetId, TargetKind, UserId, VoteDirection, VoteId


class VoteRepository(ABC):
    """Repository for Vote entity.

    Defines the contract for vote persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_user_and_target(
        self,
        user_id: UserId,
        target_kind: TargetKind,
        target_id: TargetId,
    ) -> Optional[Vote]:
        """Find a user's vote on a specific target.

        Args:
            user_id: The voter's ID
            target_kind: Type of target (thread or comment)
            target_id: ID of the target

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_target(
        self,
        target_kind: TargetKind,
        target_id: TargetId,
    ) -> List[Vote]:
        """Find all votes on a specific target.

        Args:
            target_kind: Type of target (thread or comment)
            target_id: ID of the target

        Returns:
            List of votes on the target
        """
        pass

    @abstractmethod
    async def find_by_targets(
        self,
        target_kind: TargetKind,
        target_ids: Sequence[TargetId],
    ) -> List[Vote]:
        """Find all votes on several targets of one kind (batch query).

        Args:
            target_kind: Type of targets
            target_ids: IDs of the targets

        Returns:
            Votes on any of the targets, in no particular order
        """
        pass

    @abstractmethod
    async def save(self, vote: Vote) -> Vote:
        """Insert a vote.

        Raises:
            IntegrityError: If the voter already has a vote on the target
        """
        pass

    @abstractmethod
    async def update_direction(self, vote_id: VoteId, direction: VoteDirection) -> None:
        """Flip the direction of an existing vote."""
        pass

    @abstractmethod
    async def delete(self, vote_id: VoteId) -> None:
        """Delete a vote."""
        pass
