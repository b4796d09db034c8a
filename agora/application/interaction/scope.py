"""Lifetime of a view that owns interaction state."""

import logfire


class ViewScope:
    """Tracks whether the view that started a mutation is still displayed.

    Mutations resolving after ``close()`` must not touch state that nobody
    is looking at any more.
    """

    def __init__(self, name: str = "view") -> None:
        self.name = name
        self._alive = True

    @property
    def alive(self) -> bool:
        return self._alive

    def close(self) -> None:
        if self._alive:
            self._alive = False
            logfire.debug("View scope closed", scope=self.name)
