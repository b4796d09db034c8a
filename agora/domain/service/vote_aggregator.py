"""Vote aggregation and the vote toggle rule.

Every surface that shows or changes a score goes through this module, so the
arithmetic lives in exactly one place.
"""

from collections import defaultdict
from collections.abc import Iterable

import logfire

from agora.domain.error import DataIntegrityError
from agora.domain.model.vote import Vote
from agora.domain.value import (
    TargetId,
    UserId,
    VoteAction,
    VoteDirection,
    VoteTally,
    VoteTransition,
)

from .base import Service


def resolve_transition(
    existing: VoteDirection | None, requested: VoteDirection
) -> VoteTransition:
    """Apply the toggle rule to a prior vote state.

    Args:
        existing: The voter's current direction on the target, if any
        requested: The direction the voter just clicked

    Returns:
        The store action to perform and the resulting score delta
    """
    if existing is None:
        return VoteTransition(
            action=VoteAction.INSERT,
            previous=None,
            current=requested,
            score_delta=requested.weight,
        )
    if existing == requested:
        return VoteTransition(
            action=VoteAction.DELETE,
            previous=existing,
            current=None,
            score_delta=-requested.weight,
        )
    return VoteTransition(
        action=VoteAction.UPDATE,
        previous=existing,
        current=requested,
        score_delta=2 * requested.weight,
    )


class VoteAggregator(Service):
    """Reduces raw vote records for one target to a score and viewer state.

    Stateless; a single instance can be shared by every consumer.
    """

    def aggregate(
        self,
        votes: Iterable[Vote],
        target_id: TargetId,
        viewer_id: UserId | None = None,
    ) -> VoteTally:
        """Aggregate the votes on one target.

        Votes for other targets are ignored. If a voter holds more than one
        vote on the target the most recently created one is kept (vote id
        breaks ties) and the anomaly is logged.

        Args:
            votes: Votes on the target (extra targets tolerated)
            target_id: The target to aggregate
            viewer_id: Voter whose own vote is reported as ``user_vote``

        Returns:
            Score (ups minus downs, unclamped) and the viewer's vote
        """
        by_voter: dict[UserId, list[Vote]] = defaultdict(list)
        for vote in votes:
            if vote.target_id == target_id:
                by_voter[vote.voter_id].append(vote)

        upvotes = 0
        downvotes = 0
        user_vote: VoteDirection | None = None
        for voter_id, voter_votes in by_voter.items():
            effective = self._effective_vote(target_id, voter_id, voter_votes)
            if effective.direction is VoteDirection.UP:
                upvotes += 1
            else:
                downvotes += 1
            if viewer_id is not None and voter_id == viewer_id:
                user_vote = effective.direction

        return VoteTally(
            score=upvotes - downvotes,
            upvotes=upvotes,
            downvotes=downvotes,
            user_vote=user_vote,
        )

    @staticmethod
    def _effective_vote(
        target_id: TargetId, voter_id: UserId, voter_votes: list[Vote]
    ) -> Vote:
        if len(voter_votes) == 1:
            return voter_votes[0]

        error = DataIntegrityError(target_id, voter_id, len(voter_votes))
        chosen = max(voter_votes, key=lambda v: (v.created_at, v.id))
        logfire.warn(
            "Duplicate votes for voter, keeping most recent",
            target_id=target_id,
            voter_id=voter_id,
            count=len(voter_votes),
            kept_vote_id=chosen.id,
            error=str(error),
        )
        return chosen
