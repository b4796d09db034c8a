"""Application layer DI providers."""

from dishka import Scope, provide

from agora.application.interaction import InteractionStateStore
from agora.application.usecase.comment import (
    GetCommentTreeUseCase,
    SubmitCommentUseCase,
)
from agora.application.usecase.thread import ListThreadsUseCase, RankThreadsUseCase
from agora.config import Settings
from agora.domain.service import (
    BookmarkService,
    CommentService,
    CommentTreeBuilder,
    ThreadRankingEngine,
    ThreadService,
    VoteService,
)
from agora.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_get_comment_tree_use_case(
        self,
        comment_service: CommentService,
        vote_service: VoteService,
        tree_builder: CommentTreeBuilder,
        settings: Settings,
    ) -> GetCommentTreeUseCase:
        """Provide get comment tree use case."""
        return GetCommentTreeUseCase(
            comment_service=comment_service,
            vote_service=vote_service,
            tree_builder=tree_builder,
            settings=settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_submit_comment_use_case(
        self, comment_service: CommentService, tree_builder: CommentTreeBuilder
    ) -> SubmitCommentUseCase:
        """Provide submit comment use case."""
        return SubmitCommentUseCase(
            comment_service=comment_service, tree_builder=tree_builder
        )

    # Thread use cases
    @provide(scope=Scope.REQUEST)
    def get_list_threads_use_case(
        self,
        thread_service: ThreadService,
        ranking_engine: ThreadRankingEngine,
        settings: Settings,
    ) -> ListThreadsUseCase:
        """Provide list threads use case."""
        return ListThreadsUseCase(
            thread_service=thread_service,
            ranking_engine=ranking_engine,
            settings=settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_rank_threads_use_case(
        self, ranking_engine: ThreadRankingEngine
    ) -> RankThreadsUseCase:
        """Provide rank threads use case."""
        return RankThreadsUseCase(ranking_engine=ranking_engine)

    # Interaction state (signed-out until the caller switches user)
    @provide(scope=Scope.REQUEST)
    def get_interaction_state_store(
        self, vote_service: VoteService, bookmark_service: BookmarkService
    ) -> InteractionStateStore:
        """Provide an interaction state store for one view."""
        return InteractionStateStore(
            vote_service=vote_service, bookmark_service=bookmark_service
        )
