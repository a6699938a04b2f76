"""initial schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0001_initial_schema"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

call_status = sa.Enum("online", "offline", "in_call", name="call_status")
friend_request_status = sa.Enum("pending", "accepted", "rejected", name="friend_request_status")
message_type = sa.Enum("text", "image", "video", "audio", name="message_type")
call_type = sa.Enum("audio", "video", name="call_type")
call_log_status = sa.Enum("completed", "missed", "rejected", name="call_log_status")
media_type = sa.Enum("text", "image", "video", name="media_type")
privacy = sa.Enum("public", "friends_only", name="privacy")


def _user_fk(column: str) -> sa.Column:
    return sa.Column(
        column,
        sa.Text(),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )


def _timestamp(column: str) -> sa.Column:
    return sa.Column(column, sa.DateTime(timezone=True), nullable=False)


def _create_unordered_pair_index(name: str, table: str, left: str, right: str) -> None:
    """Unique index on (smaller, larger) of two id columns, so (a, b) and (b, a) collide."""
    op.create_index(
        name,
        table,
        [
            sa.text(f"(CASE WHEN {left} < {right} THEN {left} ELSE {right} END)"),
            sa.text(f"(CASE WHEN {left} < {right} THEN {right} ELSE {left} END)"),
        ],
        unique=True,
    )


def upgrade() -> None:
    """Create the users, relationship, chat, call and status tables."""
    op.create_table(
        "users",
        sa.Column("id", sa.Text(), nullable=False),
        sa.Column("external_auth_id", sa.Text(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("emoji", sa.Text(), nullable=False),
        sa.Column("profile_picture_url", sa.Text(), nullable=True),
        sa.Column("call_status", call_status, nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("external_auth_id"),
    )

    op.create_table(
        "friend_requests",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        _user_fk("sender_id"),
        _user_fk("receiver_id"),
        sa.Column("status", friend_request_status, nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_friend_requests_sender_id", "friend_requests", ["sender_id"])
    op.create_index(
        "ix_friend_requests_receiver_status", "friend_requests", ["receiver_id", "status"]
    )
    _create_unordered_pair_index(
        "uq_friend_requests_unordered_pair", "friend_requests", "sender_id", "receiver_id"
    )

    op.create_table(
        "friendships",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        _user_fk("user1_id"),
        _user_fk("user2_id"),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user1_id", "user2_id", name="uq_friendships_pair"),
    )
    op.create_index("ix_friendships_user2_id", "friendships", ["user2_id"])

    op.create_table(
        "blocked_users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        _user_fk("blocker_id"),
        _user_fk("blocked_id"),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("blocker_id", "blocked_id", name="uq_blocked_users_pair"),
    )

    op.create_table(
        "chats",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        _user_fk("user1_id"),
        _user_fk("user2_id"),
        sa.Column("last_message_id", sa.Integer(), nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_chats_user2_id", "chats", ["user2_id"])
    _create_unordered_pair_index("uq_chats_unordered_pair", "chats", "user1_id", "user2_id")

    op.create_table(
        "chat_participants",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "chat_id",
            sa.Integer(),
            sa.ForeignKey("chats.id", ondelete="CASCADE"),
            nullable=False,
        ),
        _user_fk("user_id"),
        sa.Column("unread_count", sa.Integer(), nullable=False),
        sa.Column("last_read_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("chat_id", "user_id", name="uq_chat_participants_member"),
        sa.CheckConstraint("unread_count >= 0", name="ck_chat_participants_unread"),
    )

    op.create_table(
        "messages",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "chat_id",
            sa.Integer(),
            sa.ForeignKey("chats.id", ondelete="CASCADE"),
            nullable=False,
        ),
        _user_fk("sender_id"),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("message_type", message_type, nullable=False),
        sa.Column("is_deleted", sa.Boolean(), nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_messages_chat_created", "messages", ["chat_id", "created_at"])

    op.create_table(
        "call_logs",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        _user_fk("caller_id"),
        _user_fk("receiver_id"),
        sa.Column("call_type", call_type, nullable=False),
        sa.Column("status", call_log_status, nullable=False),
        sa.Column("duration", sa.Integer(), nullable=True),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("duration IS NULL OR duration >= 0", name="ck_call_logs_duration"),
    )
    op.create_index("ix_call_logs_caller_id", "call_logs", ["caller_id"])
    op.create_index("ix_call_logs_receiver_id", "call_logs", ["receiver_id"])

    op.create_table(
        "statuses",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        _user_fk("user_id"),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("media_url", sa.Text(), nullable=True),
        sa.Column("media_type", media_type, nullable=False),
        sa.Column("privacy", privacy, nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_statuses_user_expires", "statuses", ["user_id", "expires_at"])

    op.create_table(
        "status_views",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "status_id",
            sa.Integer(),
            sa.ForeignKey("statuses.id", ondelete="CASCADE"),
            nullable=False,
        ),
        _user_fk("viewer_id"),
        _timestamp("viewed_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("status_id", "viewer_id", name="uq_status_views_viewer"),
    )


def downgrade() -> None:
    """Drop every table, then the enum types on backends that keep them."""
    op.drop_table("status_views")
    op.drop_index("ix_statuses_user_expires", table_name="statuses")
    op.drop_table("statuses")
    op.drop_index("ix_call_logs_receiver_id", table_name="call_logs")
    op.drop_index("ix_call_logs_caller_id", table_name="call_logs")
    op.drop_table("call_logs")
    op.drop_index("ix_messages_chat_created", table_name="messages")
    op.drop_table("messages")
    op.drop_table("chat_participants")
    op.drop_index("uq_chats_unordered_pair", table_name="chats")
    op.drop_index("ix_chats_user2_id", table_name="chats")
    op.drop_table("chats")
    op.drop_table("blocked_users")
    op.drop_index("ix_friendships_user2_id", table_name="friendships")
    op.drop_table("friendships")
    op.drop_index("uq_friend_requests_unordered_pair", table_name="friend_requests")
    op.drop_index("ix_friend_requests_receiver_status", table_name="friend_requests")
    op.drop_index("ix_friend_requests_sender_id", table_name="friend_requests")
    op.drop_table("friend_requests")
    op.drop_table("users")

    bind = op.get_bind()
    for enum_type in (
        privacy,
        media_type,
        call_log_status,
        call_type,
        message_type,
        friend_request_status,
        call_status,
    ):
        enum_type.drop(bind, checkfirst=True)
