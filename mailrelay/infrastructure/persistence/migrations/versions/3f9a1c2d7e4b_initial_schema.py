"""initial schema: users, accounts, aliases, tokens, default sender

Revision ID: 3f9a1c2d7e4b
Revises:
Create Date: 2026-10-19 09:12:41.503118

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f9a1c2d7e4b"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Upgrade schema - create every table the relay uses."""
    op.create_table(
        "app_user",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("role", sa.String(length=16), nullable=False),
        sa.Column(
            "must_change_password", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("role IN ('admin', 'dev', 'user')", name="app_user_role_check"),
    )
    op.create_index("ix_app_user_email", "app_user", ["email"], unique=True)

    op.create_table(
        "account",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("display_name", sa.String(), nullable=False),
        sa.Column("encrypted_password", sa.Text(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("is_public", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("owner_id", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["owner_id"], ["app_user.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_account_email", "account", ["email"], unique=True)
    op.create_index("ix_account_owner_id", "account", ["owner_id"])

    op.create_table(
        "alias",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("alias_email", sa.String(), nullable=False),
        sa.Column("display_name", sa.String(), nullable=True),
        sa.Column("account_id", sa.String(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("is_public", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("owner_id", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["account_id"], ["account.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["owner_id"], ["app_user.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_alias_alias_email", "alias", ["alias_email"], unique=True)
    op.create_index("ix_alias_account_id", "alias", ["account_id"])
    op.create_index("ix_alias_owner_id", "alias", ["owner_id"])

    op.create_table(
        "api_token",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("token_hash", sa.String(length=64), nullable=False),
        sa.Column("last_used_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_api_token_token_hash", "api_token", ["token_hash"], unique=True)
    op.create_index("ix_api_token_user_id", "api_token", ["user_id"])

    op.create_table(
        "pending_user",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("token_hash", sa.String(length=64), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_pending_user_token_hash", "pending_user", ["token_hash"], unique=True)
    op.create_index("ix_pending_user_email", "pending_user", ["email"])

    op.create_table(
        "password_reset_token",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("token_hash", sa.String(length=64), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"], ondelete="CASCADE"),
    )
    op.create_index(
        "ix_password_reset_token_token_hash",
        "password_reset_token",
        ["token_hash"],
        unique=True,
    )
    op.create_index("ix_password_reset_token_user_id", "password_reset_token", ["user_id"])

    op.create_table(
        "default_sender",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("sender_type", sa.String(length=16), nullable=True),
        sa.Column("sender_id", sa.String(), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_by", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["updated_by"], ["app_user.id"], ondelete="SET NULL"),
        sa.CheckConstraint("id = 1", name="default_sender_singleton_check"),
        sa.CheckConstraint(
            "sender_type IS NULL OR sender_type IN ('account', 'alias')",
            name="default_sender_type_check",
        ),
    )


def downgrade() -> None:
    """Downgrade schema - drop all relay tables."""
    op.drop_table("default_sender")
    op.drop_index("ix_password_reset_token_user_id", "password_reset_token")
    op.drop_index("ix_password_reset_token_token_hash", "password_reset_token")
    op.drop_table("password_reset_token")
    op.drop_index("ix_pending_user_email", "pending_user")
    op.drop_index("ix_pending_user_token_hash", "pending_user")
    op.drop_table("pending_user")
    op.drop_index("ix_api_token_user_id", "api_token")
    op.drop_index("ix_api_token_token_hash", "api_token")
    op.drop_table("api_token")
    op.drop_index("ix_alias_owner_id", "alias")
    op.drop_index("ix_alias_account_id", "alias")
    op.drop_index("ix_alias_alias_email", "alias")
    op.drop_table("alias")
    op.drop_index("ix_account_owner_id", "account")
    op.drop_index("ix_account_email", "account")
    op.drop_table("account")
    op.drop_index("ix_app_user_email", "app_user")
    op.drop_table("app_user")
