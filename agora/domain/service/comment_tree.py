"""Comment tree assembly.

Comments are stored flat with a nullable parent reference. This module turns a
thread's flat list into an ordered forest with per-node scores, nesting levels
and reply eligibility, and supports splicing new comments into an existing
tree without a refetch.
"""

from collections import Counter
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

import logfire

from agora.domain.error import (
    CyclicReferenceError,
    DuplicateIdentifierError,
    ParentNotFoundError,
)
from agora.domain.model.comment import Comment
from agora.domain.model.vote import Vote
from agora.domain.value import CommentId, CommentOrder, UserId, VoteDirection

from .base import Service
from .vote_aggregator import VoteAggregator

DEFAULT_MAX_DEPTH = 5


@dataclass
class CommentNode:
    """Node in a comment tree.

    Wraps a comment with its aggregated score, the viewer's own vote, its
    nesting level (0 for top-level) and whether a reply may be attached.
    """

    comment: Comment
    score: int = 0
    user_vote: VoteDirection | None = None
    level: int = 0
    can_reply: bool = True
    children: list["CommentNode"] = field(default_factory=list)

    @property
    def id(self) -> CommentId:
        return self.comment.id


class CommentTree:
    """Ordered forest of comment nodes for one thread."""

    def __init__(
        self,
        roots: list[CommentNode],
        max_depth: int = DEFAULT_MAX_DEPTH,
        order: CommentOrder = CommentOrder.NEWEST_FIRST,
    ) -> None:
        self.roots = roots
        self.max_depth = max_depth
        self.order = order
        self._index: dict[CommentId, CommentNode] = {
            node.id: node for node in _preorder(roots)
        }

    def find(self, comment_id: CommentId) -> CommentNode | None:
        return self._index.get(comment_id)

    def walk(self) -> Iterator[CommentNode]:
        """Yield every node in display order (depth first, pre-order)."""
        return _preorder(self.roots)

    def can_reply_at(self, level: int) -> bool:
        return level < self.max_depth - 1

    def _register(self, node: CommentNode) -> None:
        self._index[node.id] = node

    def __contains__(self, comment_id: object) -> bool:
        return comment_id in self._index

    def __len__(self) -> int:
        return len(self._index)


def _preorder(nodes: list[CommentNode]) -> Iterator[CommentNode]:
    stack = list(reversed(nodes))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


class CommentTreeBuilder(Service):
    """Builds and incrementally updates comment trees."""

    def __init__(self, vote_aggregator: VoteAggregator | None = None) -> None:
        """Initialize comment tree builder.

        Args:
            vote_aggregator: Aggregator used for node scores
        """
        self.vote_aggregator = vote_aggregator or VoteAggregator()

    def build(
        self,
        comments: Iterable[Comment],
        votes_by_comment: Mapping[CommentId, Iterable[Vote]] | None = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
        order: CommentOrder = CommentOrder.NEWEST_FIRST,
        viewer_id: UserId | None = None,
    ) -> CommentTree:
        """Assemble a flat comment list into an ordered tree.

        Top-level comments and the children of every node are ordered by
        creation time in the direction given by ``order``, with the comment
        id breaking ties. Comments whose parent is absent from the input (or
        belongs to another thread) are dropped together with their
        descendants, and the drop is logged.

        Args:
            comments: All comments of one thread, in any order
            votes_by_comment: Votes per comment id; missing ids score zero
            max_depth: Nesting limit; nodes at ``max_depth - 1`` cannot be replied to
            order: Sibling ordering
            viewer_id: User whose own votes are reported on each node

        Returns:
            Comment tree

        Raises:
            ValueError: If max_depth is less than 1
            DuplicateIdentifierError: If two comments share an id
            CyclicReferenceError: If a parent chain loops
        """
        if max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        order = CommentOrder(order)
        votes_by_comment = votes_by_comment or {}

        comments = list(comments)
        with logfire.span(
            "comment_tree.build",
            comments=len(comments),
            max_depth=max_depth,
            order=order.value,
        ):
            counts = Counter(comment.id for comment in comments)
            duplicates = [cid for cid, count in counts.items() if count > 1]
            if duplicates:
                logfire.error("Duplicate comment identifiers", comment_ids=duplicates)
                raise DuplicateIdentifierError(duplicates)

            records = {comment.id: comment for comment in comments}
            levels = self._resolve_levels(records)

            nodes: dict[CommentId, CommentNode] = {}
            for comment_id, level in levels.items():
                tally = self.vote_aggregator.aggregate(
                    votes_by_comment.get(comment_id, ()),
                    target_id=comment_id,
                    viewer_id=viewer_id,
                )
                nodes[comment_id] = CommentNode(
                    comment=records[comment_id],
                    score=tally.score,
                    user_vote=tally.user_vote,
                    level=level,
                    can_reply=level < max_depth - 1,
                )

            roots: list[CommentNode] = []
            for node in sorted(
                nodes.values(),
                key=_creation_key,
                reverse=order is CommentOrder.NEWEST_FIRST,
            ):
                parent_id = node.comment.parent_id
                if parent_id is None:
                    roots.append(node)
                else:
                    nodes[parent_id].children.append(node)

            tree = CommentTree(roots, max_depth=max_depth, order=order)
            logfire.info(
                "Comment tree built",
                nodes=len(tree),
                roots=len(roots),
                dropped=len(records) - len(tree),
            )
            return tree

    def insert_reply(
        self, tree: CommentTree, parent_id: CommentId, comment: Comment
    ) -> CommentTree:
        """Splice a freshly created reply into an existing tree.

        The reply becomes the first child of its parent with a zero score,
        which is where a newest-first rebuild would place it. Only the path
        from the root to the parent is touched.

        Args:
            tree: Tree to mutate
            parent_id: Comment being replied to
            comment: The new reply

        Returns:
            The same tree, updated in place

        Raises:
            ParentNotFoundError: If the parent is not in the tree
            DuplicateIdentifierError: If the comment is already in the tree
            ValueError: If the reply belongs to another thread than the parent
        """
        if comment.id in tree:
            raise DuplicateIdentifierError([comment.id])
        parent = tree.find(parent_id)
        if parent is None:
            logfire.warn(
                "Reply parent missing from tree",
                parent_id=parent_id,
                comment_id=comment.id,
            )
            raise ParentNotFoundError(parent_id)
        if comment.thread_id != parent.comment.thread_id:
            logfire.error(
                "Reply belongs to another thread than its parent",
                parent_id=parent_id,
                parent_thread_id=parent.comment.thread_id,
                comment_thread_id=comment.thread_id,
            )
            raise ValueError("Parent comment does not belong to this thread")
        if comment.parent_id != parent_id:
            comment = comment.model_copy(update={"parent_id": parent_id})

        level = parent.level + 1
        node = CommentNode(
            comment=comment,
            level=level,
            can_reply=tree.can_reply_at(level),
        )
        parent.children.insert(0, node)
        tree._register(node)
        return tree

    def insert_top_level(self, tree: CommentTree, comment: Comment) -> CommentTree:
        """Splice a freshly created top-level comment into an existing tree.

        Raises:
            DuplicateIdentifierError: If the comment is already in the tree
        """
        if comment.id in tree:
            raise DuplicateIdentifierError([comment.id])
        if comment.parent_id is not None:
            comment = comment.model_copy(update={"parent_id": None})

        node = CommentNode(comment=comment, level=0, can_reply=tree.can_reply_at(0))
        tree.roots.insert(0, node)
        tree._register(node)
        return tree

    @staticmethod
    def _resolve_levels(records: Mapping[CommentId, Comment]) -> dict[CommentId, int]:
        """Compute the nesting level of every comment that reaches a root.

        Walks each parent chain iteratively, memoising resolved levels so
        every comment is visited a bounded number of times. Chains ending at
        a missing parent are dropped.
        """
        levels: dict[CommentId, int] = {}
        dropped: set[CommentId] = set()

        for start in records:
            path: list[CommentId] = []
            on_path: set[CommentId] = set()
            current: CommentId | None = start
            missing_parent: CommentId | None = None
            while current is not None and current not in levels and current not in dropped:
                if current in on_path:
                    cycle = path[path.index(current) :]
                    logfire.error("Cyclic comment parent chain", comment_ids=cycle)
                    raise CyclicReferenceError(cycle)
                record = records[current]
                path.append(current)
                on_path.add(current)
                parent_id = record.parent_id
                if parent_id is not None and (
                    parent_id not in records
                    or records[parent_id].thread_id != record.thread_id
                ):
                    missing_parent = parent_id
                    break
                current = parent_id

            if missing_parent is not None or current in dropped:
                if missing_parent is not None:
                    logfire.warn(
                        "Orphaned comment dropped with its replies",
                        comment_id=path[-1],
                        missing_parent_id=missing_parent,
                        dropped=len(path),
                    )
                dropped.update(path)
                continue

            level = -1 if current is None else levels[current]
            for comment_id in reversed(path):
                level += 1
                levels[comment_id] = level

        return levels


def _creation_key(node: CommentNode) -> tuple:
    return (node.comment.created_at, node.comment.id)
