"""Thread use cases."""

from .list_threads import (
    ListThreadsRequest,
    ListThreadsResponse,
    ListThreadsUseCase,
    ThreadListItem,
)
from .rank_threads import RankThreadsRequest, RankThreadsResponse, RankThreadsUseCase

__all__ = [
    "ListThreadsRequest",
    "ListThreadsResponse",
    "ListThreadsUseCase",
    "RankThreadsRequest",
    "RankThreadsResponse",
    "RankThreadsUseCase",
    "ThreadListItem",
]
