"""Create blog_users and posts tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Initial schema: accounts and the posts they own.
       The UNIQUE constraint on blog_users.email is what signup relies on
       to reject duplicate registrations.

Rollback: downgrade() drops both tables (all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "blog_users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "email",
            sa.String(),
            nullable=False,
            comment="Login name; compared case-sensitively",
        ),
        sa.Column(
            "password",
            sa.String(),
            nullable=False,
            comment="Salted password hash",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_blog_users_email"),
    )

    op.create_table(
        "posts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["blog_users.id"], name="fk_posts_user_id"),
    )

    op.create_index("idx_posts_user_id", "posts", ["user_id"])


def downgrade() -> None:
    op.drop_index("idx_posts_user_id", table_name="posts")
    op.drop_table("posts")
    op.drop_table("blog_users")
