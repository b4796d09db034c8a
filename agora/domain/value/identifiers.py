"""Strongly typed identifiers for Agora domain entities.

Identifiers are opaque strings issued by the remote store. NewType keeps
thread, comment and user identifiers from being mixed up.
"""

from typing import NewType

UserId = NewType("UserId", str)
CommunityId = NewType("CommunityId", str)
ThreadId = NewType("ThreadId", str)
CommentId = NewType("CommentId", str)
VoteId = NewType("VoteId", str)
BookmarkId = NewType("BookmarkId", str)

# Either a ThreadId or a CommentId, depending on the accompanying TargetKind
TargetId = NewType("TargetId", str)
