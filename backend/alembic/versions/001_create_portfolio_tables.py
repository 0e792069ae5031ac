"""Create portfolio tables

Revision ID: 001
Revises: None
Create Date: 2024-06-10 00:00:00.000000+00:00

Creates the four collections: resources, projects, profile (singleton keyed
by id = 'profile') and messages.
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
        "resources",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.Text(), nullable=True),
        sa.Column("category", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "file_url",
            sa.String(255),
            nullable=True,
            comment="Public path of the uploaded file (/uploads/<name>)",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "projects",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.Text(), nullable=True),
        sa.Column("problem", sa.Text(), nullable=True),
        sa.Column("decision", sa.Text(), nullable=True),
        sa.Column("tradeoff", sa.Text(), nullable=True),
        sa.Column("outcome", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # One row at most: every write targets id = 'profile'
    op.create_table(
        "profile",
        sa.Column("id", sa.String(32), nullable=False),
        *[
            sa.Column(name, sa.Text(), nullable=False, server_default=sa.text("''"))
            for name in (
                "full_name",
                "role",
                "about",
                "current_focus",
                "skills",
                "linkedin",
                "github",
                "email",
            )
        ],
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "messages",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("email", sa.Text(), nullable=True),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column(
            "timestamp",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column("read", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_messages_timestamp", "messages", ["timestamp"])


def downgrade() -> None:
    """Drops every portfolio table. All data is lost."""
    op.drop_index("idx_messages_timestamp", table_name="messages")
    op.drop_table("messages")
    op.drop_table("profile")
    op.drop_table("projects")
    op.drop_table("resources")
