"""SQLAlchemy table definitions for Agora.

These mirror the hosted store's schema. The core reads and writes comments,
votes and bookmarks, and only reads threads, profiles, communities and tags.
"""

from sqlalchemy import (
    Column,
    Enum,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# PROFILES TABLE (owned by the auth collaborator)
# ============================================================================
profiles_table = Table(
    "profiles",
    metadata,
    Column("id", UUID(as_uuid=False), primary_key=True),
    Column("username", String(255), nullable=True),
    Column("avatar_url", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# COMMUNITIES TABLE
# ============================================================================
communities_table = Table(
    "communities",
    metadata,
    Column("id", UUID(as_uuid=False), primary_key=True, server_default="gen_random_uuid()"),
    Column("name", String(100), nullable=False, unique=True),
    Column("description", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# THREADS TABLE
# ============================================================================
threads_table = Table(
    "threads",
    metadata,
    Column("id", UUID(as_uuid=False), primary_key=True, server_default="gen_random_uuid()"),
    Column("title", String(300), nullable=False),
    Column("content", Text, nullable=False, server_default=""),
    Column(
        "user_id",
        UUID(as_uuid=False),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "community_id",
        UUID(as_uuid=False),
        ForeignKey("communities.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_threads_community_id", threads_table.c.community_id)
Index("idx_threads_user_id", threads_table.c.user_id)
Index("idx_threads_created_at", threads_table.c.created_at)

# ============================================================================
# TAGS TABLES
# ============================================================================
tags_table = Table(
    "tags",
    metadata,
    Column("id", UUID(as_uuid=False), primary_key=True, server_default="gen_random_uuid()"),
    Column("name", String(50), nullable=False, unique=True),
)

thread_tags_table = Table(
    "thread_tags",
    metadata,
    Column(
        "thread_id",
        UUID(as_uuid=False),
        ForeignKey("threads.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "tag_id",
        UUID(as_uuid=False),
        ForeignKey("tags.id", ondelete="RESTRICT"),
        primary_key=True,
    ),
)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID(as_uuid=False), primary_key=True, server_default="gen_random_uuid()"),
    Column(
        "thread_id",
        UUID(as_uuid=False),
        ForeignKey("threads.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "parent_id",
        UUID(as_uuid=False),
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
    ),
    Column(
        "user_id",
        UUID(as_uuid=False),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("content", Text, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_comments_thread_id", comments_table.c.thread_id)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_created_at", comments_table.c.created_at)

# ============================================================================
# VOTES TABLE (polymorphic: thread or comment)
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", UUID(as_uuid=False), primary_key=True, server_default="gen_random_uuid()"),
    Column(
        "user_id",
        UUID(as_uuid=False),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "target_kind",
        Enum("thread", "comment", name="vote_target_kind", create_type=False),
        nullable=False,
    ),
    Column("target_id", UUID(as_uuid=False), nullable=False),
    Column(
        "vote_type",
        Enum("up", "down", name="vote_type", create_type=False),
        nullable=False,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "target_kind", "target_id", name="unique_vote"),
)

Index("idx_votes_target", votes_table.c.target_kind, votes_table.c.target_id)

# ============================================================================
# BOOKMARKS TABLE
# ============================================================================
bookmarks_table = Table(
    "bookmarks",
    metadata,
    Column("id", UUID(as_uuid=False), primary_key=True, server_default="gen_random_uuid()"),
    Column(
        "user_id",
        UUID(as_uuid=False),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "thread_id",
        UUID(as_uuid=False),
        ForeignKey("threads.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "thread_id", name="unique_bookmark"),
)

Index("idx_bookmarks_user_id", bookmarks_table.c.user_id)
