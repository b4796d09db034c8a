"""Domain layer errors."""

from collections.abc import Iterable


class DomainError(Exception):
    """Base domain error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class DataIntegrityError(DomainError):
    """More votes for one (voter, target) pair than the invariant allows.

    Recovered locally by keeping the most recent vote; never propagated out
    of aggregation, only logged.
    """

    def __init__(self, target_id: str, voter_id: str, count: int):
        self.target_id = target_id
        self.voter_id = voter_id
        self.count = count
        super().__init__(
            f"Voter {voter_id} has {count} votes on target {target_id}, expected at most 1"
        )


class MalformedCommentsError(DomainError):
    """Base for comment input that cannot be assembled into a tree."""

    def __init__(self, message: str, comment_ids: Iterable[str]):
        self.comment_ids = frozenset(comment_ids)
        super().__init__(message)


class DuplicateIdentifierError(MalformedCommentsError):
    """Two or more comment records share an identifier."""

    def __init__(self, comment_ids: Iterable[str]):
        ids = sorted(set(comment_ids))
        super().__init__(f"Duplicate comment identifiers: {', '.join(ids)}", ids)


class CyclicReferenceError(MalformedCommentsError):
    """A comment's parent chain loops back on itself."""

    def __init__(self, comment_ids: Iterable[str]):
        ids = sorted(set(comment_ids))
        super().__init__(f"Cyclic parent chain through comments: {', '.join(ids)}", ids)


class ParentNotFoundError(DomainError):
    """Incremental insertion target is missing from the current tree.

    Usually means the tree is a stale snapshot; callers should refetch.
    """

    def __init__(self, parent_id: str):
        self.parent_id = parent_id
        super().__init__(f"Parent comment not found in tree: {parent_id}")


class AuthRequiredError(DomainError):
    """A mutation was attempted without a signed-in user."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"Sign in required to {action}")


class MutationInFlightError(DomainError):
    """A mutation on the same entity is still awaiting the remote store."""

    def __init__(self, kind: str, entity_id: str):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"A mutation on {kind} {entity_id} is already in flight")


class RemoteOperationError(DomainError):
    """The remote store failed (network, permission, conflict)."""

    def __init__(self, operation: str, reason: str | None = None):
        self.operation = operation
        self.reason = reason
        message = f"Remote operation failed: {operation}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
