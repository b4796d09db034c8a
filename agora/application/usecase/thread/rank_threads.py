"""Rank threads use case."""

from pydantic import BaseModel

from agora.domain.model.thread import ThreadSummary
from agora.domain.service import ThreadRankingEngine
from agora.domain.value import RankMode


class RankThreadsRequest(BaseModel):
    """Re-rank an already fetched thread list."""

    threads: list[ThreadSummary]
    mode: RankMode


class RankThreadsResponse(BaseModel):
    """Rank threads response."""

    threads: list[ThreadSummary]
    mode: RankMode


class RankThreadsUseCase:
    """Use case for switching the ranking mode of a list on screen.

    No remote calls; the list is re-sorted locally.
    """

    def __init__(self, ranking_engine: ThreadRankingEngine) -> None:
        self.ranking_engine = ranking_engine

    async def execute(self, request: RankThreadsRequest) -> RankThreadsResponse:
        return RankThreadsResponse(
            threads=self.ranking_engine.rank(request.threads, request.mode),
            mode=request.mode,
        )
