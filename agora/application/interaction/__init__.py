"""Optimistic interaction state for votes and bookmarks."""

from .scope import ViewScope
from .store import InteractionStateStore

__all__ = ["InteractionStateStore", "ViewScope"]
