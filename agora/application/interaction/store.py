"""Optimistic per-entity interaction state for the current viewer.

Each vote or bookmark click is applied locally first, then sent to the remote
store. The remote result either confirms the local guess (reconcile) or the
local state is rolled back to the snapshot taken before the click. One
mutation per entity may be pending at a time; a second one is rejected.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import logfire

from agora.domain.error import (
    AuthRequiredError,
    MutationInFlightError,
    RemoteOperationError,
)
from agora.domain.model.interaction import InteractionState
from agora.domain.service import BookmarkService, VoteService, resolve_transition
from agora.domain.value import TargetId, TargetKind, ThreadId, UserId, VoteDirection

from .scope import ViewScope

StateKey = tuple[TargetKind, str]
T = TypeVar("T")


class InteractionStateStore:
    """Interaction state of threads and comments for one viewer session."""

    def __init__(
        self,
        vote_service: VoteService,
        bookmark_service: BookmarkService,
        user_id: UserId | None = None,
        scope: ViewScope | None = None,
    ) -> None:
        """Initialize interaction state store.

        Args:
            vote_service: Vote domain service (remote vote mutation)
            bookmark_service: Bookmark domain service (remote bookmark mutation)
            user_id: Signed-in viewer, or None when signed out
            scope: Lifetime of the owning view
        """
        self.vote_service = vote_service
        self.bookmark_service = bookmark_service
        self.user_id = user_id
        self.scope = scope or ViewScope()
        self._states: dict[StateKey, InteractionState] = {}
        # Bumped on every user switch; results from an older epoch are stale
        self._epoch = 0

    def get_state(self, kind: TargetKind, entity_id: str) -> InteractionState:
        return self._states.get((kind, entity_id), InteractionState())

    def seed(
        self,
        kind: TargetKind,
        entity_id: str,
        score: int = 0,
        vote: VoteDirection | None = None,
        bookmarked: bool = False,
    ) -> InteractionState:
        """Prime an entity's state from freshly fetched data.

        A pending mutation is never overwritten by a seed.
        """
        key = (kind, entity_id)
        existing = self._states.get(key)
        if existing is not None and existing.in_flight:
            return existing
        state = InteractionState(vote=vote, score=score, bookmarked=bookmarked)
        self._states[key] = state
        return state

    def switch_user(self, user_id: UserId | None) -> None:
        """Change the signed-in viewer.

        Cached state belongs to the previous viewer, so it is cleared, and
        every pending mutation's result will be discarded on arrival.
        """
        if user_id == self.user_id:
            return
        logfire.info(
            "Interaction store user switched",
            previous_user_id=self.user_id,
            user_id=user_id,
            cleared=len(self._states),
        )
        self.user_id = user_id
        self._states.clear()
        self._epoch += 1

    async def apply_vote(
        self, kind: TargetKind, entity_id: str, direction: VoteDirection
    ) -> InteractionState:
        """Vote on a thread or comment using the toggle rule.

        Args:
            kind: Thread or comment
            entity_id: Target ID
            direction: Direction clicked

        Returns:
            The entity's state once the mutation settled

        Raises:
            AuthRequiredError: If nobody is signed in (nothing changes)
            MutationInFlightError: If a mutation on the entity is pending
            RemoteOperationError: If the remote store failed (state rolled back)
        """
        user_id = self._require_user("vote")
        key = (kind, entity_id)
        current = self._claim(key)

        transition = resolve_transition(current.vote, direction)
        self._states[key] = current.model_copy(
            update={
                "vote": transition.current,
                "score": current.score + transition.score_delta,
                "in_flight": True,
                "last_known_good": current.snapshot(),
            }
        )

        remote = await self._settle(
            key,
            "vote",
            lambda: self.vote_service.cast_vote(
                kind, TargetId(entity_id), user_id, direction
            ),
        )
        if remote is None:
            return self.get_state(kind, entity_id)

        base = self._states[key].last_known_good
        reconciled = self._states[key].model_copy(
            update={
                "vote": remote.current,
                "score": base.score + remote.score_delta,
                "in_flight": False,
                "last_known_good": None,
            }
        )
        if remote.previous != current.vote:
            logfire.warn(
                "Local vote state was stale, reconciled with remote",
                kind=kind.value,
                entity_id=entity_id,
                local_vote=current.vote,
                remote_previous=remote.previous,
            )
        self._states[key] = reconciled
        return reconciled

    async def toggle_bookmark(self, thread_id: ThreadId) -> bool:
        """Save or unsave a thread.

        Returns:
            Whether the thread is bookmarked once the mutation settled

        Raises:
            AuthRequiredError: If nobody is signed in (nothing changes)
            MutationInFlightError: If a mutation on the thread is pending
            RemoteOperationError: If the remote store failed (state rolled back)
        """
        user_id = self._require_user("bookmark")
        key = (TargetKind.THREAD, thread_id)
        current = self._claim(key)

        self._states[key] = current.model_copy(
            update={
                "bookmarked": not current.bookmarked,
                "in_flight": True,
                "last_known_good": current.snapshot(),
            }
        )

        remote = await self._settle(
            key,
            "bookmark",
            lambda: self.bookmark_service.toggle_bookmark(thread_id, user_id),
        )
        if remote is None:
            return self.get_state(TargetKind.THREAD, thread_id).bookmarked

        self._states[key] = self._states[key].model_copy(
            update={"bookmarked": remote, "in_flight": False, "last_known_good": None}
        )
        return remote

    def _require_user(self, action: str) -> UserId:
        if self.user_id is None:
            logfire.info("Mutation rejected, not signed in", action=action)
            raise AuthRequiredError(action)
        return self.user_id

    def _claim(self, key: StateKey) -> InteractionState:
        current = self._states.get(key, InteractionState())
        if current.in_flight:
            kind, entity_id = key
            logfire.info(
                "Mutation rejected, previous one still pending",
                kind=kind.value,
                entity_id=entity_id,
            )
            raise MutationInFlightError(kind.value, entity_id)
        return current

    async def _settle(
        self,
        key: StateKey,
        operation: str,
        call: Callable[[], Awaitable[T]],
    ) -> T | None:
        """Await the remote mutation and handle failure and staleness.

        Returns:
            The remote result, or None if it arrived for a view or user that
            is gone (state untouched)

        Raises:
            RemoteOperationError: After rolling back the optimistic change
            asyncio.CancelledError: After rolling back, if the caller cancelled
        """
        epoch = self._epoch
        kind, entity_id = key
        with logfire.span(
            "interaction_store.settle",
            operation=operation,
            kind=kind.value,
            entity_id=entity_id,
        ):
            try:
                result = await call()
            except asyncio.CancelledError:
                if self._is_live(epoch):
                    self._roll_back(key)
                    logfire.warn(
                        "Optimistic update rolled back, mutation cancelled",
                        operation=operation,
                        kind=kind.value,
                        entity_id=entity_id,
                    )
                raise
            except Exception as e:
                if not self._is_live(epoch):
                    self._log_discarded(operation, key)
                    return None
                self._roll_back(key)
                logfire.warn(
                    "Optimistic update rolled back",
                    operation=operation,
                    kind=kind.value,
                    entity_id=entity_id,
                    error=str(e),
                )
                if isinstance(e, RemoteOperationError):
                    raise
                raise RemoteOperationError(operation, type(e).__name__) from e

            if not self._is_live(epoch):
                self._log_discarded(operation, key)
                return None
            return result

    def _roll_back(self, key: StateKey) -> None:
        state = self._states[key]
        snapshot = state.last_known_good
        self._states[key] = InteractionState(
            vote=snapshot.vote,
            score=snapshot.score,
            bookmarked=snapshot.bookmarked,
        )

    def _is_live(self, epoch: int) -> bool:
        return self.scope.alive and epoch == self._epoch

    def _log_discarded(self, operation: str, key: StateKey) -> None:
        kind, entity_id = key
        logfire.info(
            "Late mutation result discarded",
            operation=operation,
            kind=kind.value,
            entity_id=entity_id,
            scope_alive=self.scope.alive,
        )
