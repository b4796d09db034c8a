"""Submit comment use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel, ConfigDict, Field

from agora.domain.error import AuthRequiredError, ParentNotFoundError
from agora.domain.service import CommentService, CommentTree, CommentTreeBuilder
from agora.domain.value import Author, CommentId, ThreadId, UserId


class SubmitCommentRequest(BaseModel):
    """Submit comment request.

    ``tree`` is the tree currently on screen, if any; the new comment is
    spliced into it so the view updates without a refetch.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    thread_id: str
    content: str
    author_id: str | None = None  # None when signed out
    author_name: str = "Anonymous"
    author_avatar_url: str | None = None
    parent_id: str | None = None  # Parent comment ID for replies
    tree: CommentTree | None = Field(default=None, exclude=True)


class SubmitCommentResponse(BaseModel):
    """Submit comment response."""

    comment_id: str
    thread_id: str
    parent_id: str | None
    content: str
    created_at: datetime
    level: int | None  # None when no tree was given or it needs a refetch
    can_reply: bool | None
    needs_refetch: bool


class SubmitCommentUseCase:
    """Use case for posting a top-level comment or a reply."""

    def __init__(
        self,
        comment_service: CommentService,
        tree_builder: CommentTreeBuilder,
    ) -> None:
        """Initialize submit comment use case.

        Args:
            comment_service: Comment domain service
            tree_builder: Comment tree builder, for incremental insertion
        """
        self.comment_service = comment_service
        self.tree_builder = tree_builder

    async def execute(self, request: SubmitCommentRequest) -> SubmitCommentResponse:
        """Execute submit comment flow.

        Steps:
        1. Require a signed-in author
        2. Create the comment via comment service (validates parent if replying)
        3. Splice it into the caller's tree; a missing parent flags a refetch

        Args:
            request: Submit comment request

        Returns:
            Submit comment response

        Raises:
            AuthRequiredError: If no author is signed in (nothing is written)
            NotFoundError: If the parent comment does not exist
            RemoteOperationError: If the store fails
        """
        if not request.author_id:
            raise AuthRequiredError("comment")

        parent_id = CommentId(request.parent_id) if request.parent_id else None
        with logfire.span(
            "submit_comment.execute",
            thread_id=request.thread_id,
            parent_id=parent_id,
        ):
            comment = await self.comment_service.create_comment(
                thread_id=ThreadId(request.thread_id),
                author=Author(
                    id=UserId(request.author_id),
                    name=request.author_name,
                    avatar_url=request.author_avatar_url,
                ),
                content=request.content,
                parent_id=parent_id,
            )

            level = None
            can_reply = None
            needs_refetch = False
            tree = request.tree
            if tree is not None:
                try:
                    if parent_id is None:
                        self.tree_builder.insert_top_level(tree, comment)
                    else:
                        self.tree_builder.insert_reply(tree, parent_id, comment)
                    node = tree.find(comment.id)
                    level = node.level
                    can_reply = node.can_reply
                except ParentNotFoundError:
                    logfire.warn(
                        "Reply parent not in displayed tree, refetch needed",
                        comment_id=comment.id,
                        parent_id=parent_id,
                    )
                    needs_refetch = True

            return SubmitCommentResponse(
                comment_id=comment.id,
                thread_id=comment.thread_id,
                parent_id=comment.parent_id,
                content=comment.content,
                created_at=comment.created_at,
                level=level,
                can_reply=can_reply,
                needs_refetch=needs_refetch,
            )
