"""Domain services."""

from .base import Service, remote_operation
from .bookmark_service import BookmarkService
from .comment_service import CommentService
from .comment_tree import CommentNode, CommentTree, CommentTreeBuilder
from .thread_ranking import ThreadRankingEngine
from .thread_service import ThreadService
from .vote_aggregator import VoteAggregator, resolve_transition
from .vote_service import VoteService

__all__ = [
    "BookmarkService",
    "CommentNode",
    "CommentService",
    "CommentTree",
    "CommentTreeBuilder",
    "Service",
    "ThreadRankingEngine",
    "ThreadService",
    "VoteAggregator",
    "VoteService",
    "remote_operation",
    "resolve_transition",
]
