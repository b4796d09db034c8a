"""Domain layer DI providers."""

from dishka import Scope, provide

from agora.domain.repository import (
    BookmarkRepository,
    CommentRepository,
    ThreadRepository,
    VoteRepository,
)
from agora.domain.service import (
    BookmarkService,
    CommentService,
    CommentTreeBuilder,
    ThreadRankingEngine,
    ThreadService,
    VoteAggregator,
    VoteService,
)
from agora.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Repository-backed services are REQUEST-scoped to align with the
    repository/session lifecycle. The pure components are stateless and
    shared at APP scope.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_vote_aggregator(self) -> VoteAggregator:
        """Provide vote aggregator."""
        return VoteAggregator()

    @provide(scope=Scope.APP)
    def get_comment_tree_builder(
        self, vote_aggregator: VoteAggregator
    ) -> CommentTreeBuilder:
        """Provide comment tree builder."""
        return CommentTreeBuilder(vote_aggregator=vote_aggregator)

    @provide(scope=Scope.APP)
    def get_thread_ranking_engine(self) -> ThreadRankingEngine:
        """Provide thread ranking engine."""
        return ThreadRankingEngine()

    @provide
    def get_comment_service(
        self, comment_repository: CommentRepository
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(comment_repository=comment_repository)

    @provide
    def get_vote_service(
        self, vote_repository: VoteRepository, vote_aggregator: VoteAggregator
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository, vote_aggregator=vote_aggregator
        )

    @provide
    def get_bookmark_service(
        self, bookmark_repository: BookmarkRepository
    ) -> BookmarkService:
        """Provide bookmark domain service."""
        return BookmarkService(bookmark_repository=bookmark_repository)

    @provide
    def get_thread_service(
        self, thread_repository: ThreadRepository, bookmark_service: BookmarkService
    ) -> ThreadService:
        """Provide thread summary domain service."""
        return ThreadService(
            thread_repository=thread_repository, bookmark_service=bookmark_service
        )
