"""Get comment tree use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel, ConfigDict, Field

from agora.config import Settings
from agora.domain.error import MalformedCommentsError, RemoteOperationError
from agora.domain.model.comment import Comment
from agora.domain.model.vote import Vote
from agora.domain.service import (
    CommentNode,
    CommentService,
    CommentTree,
    CommentTreeBuilder,
    VoteService,
)
from agora.domain.value import CommentId, CommentOrder, ThreadId, UserId


class CommentNodeResponse(BaseModel):
    """Comment tree node for the presentation layer.

    Recursive structure mirroring the domain tree.
    """

    comment_id: str
    parent_id: str | None
    author_id: str
    author_name: str
    author_avatar_url: str | None
    content: str
    score: int
    user_vote: str | None
    level: int
    can_reply: bool
    created_at: datetime
    children: list["CommentNodeResponse"]

    @classmethod
    def from_domain(cls, node: CommentNode) -> "CommentNodeResponse":
        """Convert a domain CommentNode, recursing into its children."""
        comment = node.comment
        return cls(
            comment_id=comment.id,
            parent_id=comment.parent_id,
            author_id=comment.author.id,
            author_name=comment.author.name,
            author_avatar_url=comment.author.avatar_url,
            content=comment.content,
            score=node.score,
            user_vote=node.user_vote.value if node.user_vote else None,
            level=node.level,
            can_reply=node.can_reply,
            created_at=comment.created_at,
            children=[cls.from_domain(child) for child in node.children],
        )


class GetCommentTreeRequest(BaseModel):
    """Get comment tree request."""

    thread_id: str
    viewer_id: str | None = None  # Current user ID (if signed in)
    max_depth: int | None = Field(default=None, ge=1)
    order: CommentOrder | None = None


class GetCommentTreeResponse(BaseModel):
    """Get comment tree response.

    ``tree`` is the live domain tree, kept by the caller for incremental
    insertion of new comments; it is not serialised.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    thread_id: str
    roots: list[CommentNodeResponse]
    total_comments: int
    skipped_comment_ids: list[str]
    votes_unavailable: bool
    tree: CommentTree = Field(exclude=True)


class GetCommentTreeUseCase:
    """Use case for loading a thread's comments as a scored, ordered tree."""

    def __init__(
        self,
        comment_service: CommentService,
        vote_service: VoteService,
        tree_builder: CommentTreeBuilder,
        settings: Settings,
    ) -> None:
        """Initialize get comment tree use case.

        Args:
            comment_service: Comment domain service
            vote_service: Vote domain service
            tree_builder: Comment tree builder
            settings: Application settings (tree depth and order defaults)
        """
        self.comment_service = comment_service
        self.vote_service = vote_service
        self.tree_builder = tree_builder
        self.settings = settings

    async def execute(self, request: GetCommentTreeRequest) -> GetCommentTreeResponse:
        """Execute get comment tree flow.

        Steps:
        1. Fetch the thread's flat comment list
        2. Fetch votes for all comments in one batch (zero votes if that fails)
        3. Build the tree, skipping records that make it malformed
        4. Convert domain nodes to response models

        Args:
            request: Get comment tree request

        Returns:
            Comment tree

        Raises:
            RemoteOperationError: If the comments could not be fetched
        """
        thread_id = ThreadId(request.thread_id)
        viewer_id = UserId(request.viewer_id) if request.viewer_id else None
        max_depth = request.max_depth or self.settings.comments.max_depth
        order = request.order or CommentOrder(self.settings.comments.order)

        with logfire.span(
            "get_comment_tree.execute",
            thread_id=thread_id,
            max_depth=max_depth,
            order=order.value,
        ):
            comments = await self.comment_service.get_comments_for_thread(thread_id)

            votes_unavailable = False
            try:
                votes = await self.vote_service.get_votes_for_comments(
                    [comment.id for comment in comments]
                )
            except RemoteOperationError as e:
                logfire.warn(
                    "Comment votes unavailable, showing zero scores",
                    thread_id=thread_id,
                    error=str(e),
                )
                votes = {}
                votes_unavailable = True

            tree, skipped = self._build_skipping_malformed(
                comments, votes, max_depth, order, viewer_id
            )

            return GetCommentTreeResponse(
                thread_id=thread_id,
                roots=[CommentNodeResponse.from_domain(root) for root in tree.roots],
                total_comments=len(tree),
                skipped_comment_ids=sorted(skipped),
                votes_unavailable=votes_unavailable,
                tree=tree,
            )

    def _build_skipping_malformed(
        self,
        comments: list[Comment],
        votes: dict[CommentId, list[Vote]],
        max_depth: int,
        order: CommentOrder,
        viewer_id: UserId | None,
    ) -> tuple[CommentTree, set[CommentId]]:
        skipped: set[CommentId] = set()
        while True:
            try:
                tree = self.tree_builder.build(
                    [comment for comment in comments if comment.id not in skipped],
                    votes,
                    max_depth=max_depth,
                    order=order,
                    viewer_id=viewer_id,
                )
                return tree, skipped
            except MalformedCommentsError as e:
                # Every retry removes at least one remaining record
                logfire.warn(
                    "Skipping malformed comment records",
                    error=str(e),
                    comment_ids=sorted(e.comment_ids),
                )
                skipped |= e.comment_ids
