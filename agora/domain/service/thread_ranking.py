"""Thread list ranking."""

from collections.abc import Callable, Iterable

import logfire

from agora.domain.model.thread import ThreadSummary
from agora.domain.value import RankMode

from .base import Service

SortKey = Callable[[ThreadSummary], object]


def _created(thread: ThreadSummary) -> object:
    return thread.created_at


def _score(thread: ThreadSummary) -> object:
    return thread.score


def _comment_count(thread: ThreadSummary) -> object:
    return thread.comment_count


def _activity(thread: ThreadSummary) -> object:
    return thread.score + thread.comment_count


# Keys per mode, most significant first. All are sorted descending; the thread
# id is the final ascending tie-breaker so the output is a total order.
_MODE_KEYS: dict[RankMode, tuple[SortKey, ...]] = {
    RankMode.NEW: (_created,),
    RankMode.TOP: (_score, _created),
    RankMode.COMMENTS: (_comment_count, _score, _created),
    RankMode.TRENDING: (_activity, _created),
}


class ThreadRankingEngine(Service):
    """Orders thread summaries for list views.

    Pure and deterministic: the same input multiset and mode always produce
    the same sequence, whatever order the input arrives in.

    Modes:
    - new: most recently created first
    - top: highest score first, newer first on ties
    - comments: most comments first, then score, then newer
    - trending: highest score plus comment count first, newer first on ties
    """

    def rank(
        self, threads: Iterable[ThreadSummary], mode: RankMode | str = RankMode.NEW
    ) -> list[ThreadSummary]:
        """Rank threads by the given mode.

        Args:
            threads: Thread summaries to order (not mutated)
            mode: Ranking mode or its string value

        Returns:
            New list in ranked order

        Raises:
            ValueError: If mode is not a known ranking mode
        """
        mode = RankMode(mode)
        ranked = sorted(threads, key=lambda thread: thread.id)
        # Stable sorts from least to most significant key
        for key in reversed(_MODE_KEYS[mode]):
            ranked.sort(key=key, reverse=True)
        logfire.debug("Threads ranked", mode=mode.value, count=len(ranked))
        return ranked
