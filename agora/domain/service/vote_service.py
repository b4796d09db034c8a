"""Vote domain service."""

from collections import defaultdict
from collections.abc import Sequence
from datetime import datetime
from uuid import uuid4

import logfire

from agora.domain.model.vote import Vote
from agora.domain.repository import VoteRepository
from agora.domain.value import (
    CommentId,
    TargetId,
    TargetKind,
    UserId,
    VoteAction,
    VoteDirection,
    VoteId,
    VoteTally,
    VoteTransition,
)

from .base import Service, remote_operation
from .vote_aggregator import VoteAggregator, resolve_transition


class VoteService(Service):
    """Domain service for vote operations."""

    def __init__(
        self,
        vote_repository: VoteRepository,
        vote_aggregator: VoteAggregator,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            vote_aggregator: Aggregator for tallies
        """
        self.vote_repository = vote_repository
        self.vote_aggregator = vote_aggregator

    async def cast_vote(
        self,
        target_kind: TargetKind,
        target_id: TargetId,
        user_id: UserId,
        direction: VoteDirection,
    ) -> VoteTransition:
        """Apply the toggle rule for a vote click and persist the result.

        No prior vote inserts one; the same direction removes it; the
        opposite direction flips it in place.

        Args:
            target_kind: Thread or comment
            target_id: Target ID
            user_id: Voter ID
            direction: Direction clicked

        Returns:
            The transition that was applied

        Raises:
            RemoteOperationError: If the store fails or a concurrent vote wins
        """
        with logfire.span(
            "vote_service.cast_vote",
            target_kind=target_kind.value,
            target_id=target_id,
            user_id=user_id,
            direction=direction.value,
        ):
            with remote_operation("cast_vote", target_id=target_id, user_id=user_id):
                existing = await self.vote_repository.find_by_user_and_target(
                    user_id, target_kind, target_id
                )
                transition = resolve_transition(
                    existing.direction if existing else None, direction
                )

                if transition.action is VoteAction.INSERT:
                    # Raises IntegrityError if a concurrent vote landed first
                    await self.vote_repository.save(
                        Vote(
                            id=VoteId(str(uuid4())),
                            target_kind=target_kind,
                            target_id=target_id,
                            voter_id=user_id,
                            direction=direction,
                            created_at=datetime.now(),
                        )
                    )
                elif transition.action is VoteAction.UPDATE:
                    await self.vote_repository.update_direction(existing.id, direction)
                else:
                    await self.vote_repository.delete(existing.id)

            logfire.info(
                "Vote applied",
                action=transition.action.value,
                score_delta=transition.score_delta,
                target_id=target_id,
            )
            return transition

    async def get_tally(
        self,
        target_kind: TargetKind,
        target_id: TargetId,
        viewer_id: UserId | None = None,
    ) -> VoteTally:
        """Get the aggregated score of one target for a viewer."""
        with logfire.span("vote_service.get_tally", target_id=target_id):
            with remote_operation("get_votes", target_id=target_id):
                votes = await self.vote_repository.find_by_target(target_kind, target_id)
            return self.vote_aggregator.aggregate(votes, target_id, viewer_id)

    async def get_votes_for_comments(
        self, comment_ids: Sequence[CommentId]
    ) -> dict[CommentId, list[Vote]]:
        """Fetch votes for many comments in one query.

        Args:
            comment_ids: Comments to fetch votes for

        Returns:
            Votes grouped by comment; comments without votes are absent
        """
        if not comment_ids:
            return {}
        with logfire.span(
            "vote_service.get_votes_for_comments", comment_count=len(comment_ids)
        ):
            with remote_operation("get_comment_votes"):
                votes = await self.vote_repository.find_by_targets(
                    TargetKind.COMMENT, list(comment_ids)
                )
            grouped: dict[CommentId, list[Vote]] = defaultdict(list)
            for vote in votes:
                grouped[CommentId(vote.target_id)].append(vote)
            return dict(grouped)
