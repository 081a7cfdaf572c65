# This project was developed with assistance from AI tools.
"""add access control models

Revision ID: 3f1c9a7e2b10
Revises:
Create Date: 2026-10-12 09:14:22.418730

"""

import sqlalchemy as sa
from alembic import op

revision = "3f1c9a7e2b10"
down_revision = None
branch_labels = None
depends_on = None


def _ownership_columns() -> list[sa.Column]:
    return [
        sa.Column("user_id", sa.String(128), nullable=True),
        sa.Column("created_by", sa.String(255), nullable=True),
        sa.Column("inviter_user_id", sa.String(128), nullable=True),
        sa.Column("partner_email", sa.String(255), nullable=True),
        sa.Column("team_id", sa.String(64), nullable=True),
        sa.Column("team_name", sa.String(255), nullable=True),
        sa.Column("team_code", sa.String(32), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "roles",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("key", sa.String(64), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("permissions", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("key"),
    )
    op.create_index("ix_roles_key", "roles", ["key"])

    op.create_table(
        "users",
        sa.Column("id", sa.String(128), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("role_id", sa.String(64), nullable=True),
        sa.Column("role_key", sa.String(64), nullable=True),
        sa.Column("role_name", sa.String(255), nullable=True),
        sa.Column("team", sa.String(64), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"])
    op.create_index("ix_users_role_key", "users", ["role_key"])
    op.create_index("ix_users_team", "users", ["team"])

    op.create_table(
        "teams",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("team_code", sa.String(32), nullable=True),
        sa.Column("members", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_teams_team_code", "teams", ["team_code"])

    op.create_table(
        "registrations",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("type", sa.String(2), nullable=True),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("company_name", sa.String(255), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("pipeline_status", sa.String(20), nullable=True),
        *_ownership_columns(),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    for column in ("user_id", "created_by", "inviter_user_id", "team_id"):
        op.create_index(f"ix_registrations_{column}", "registrations", [column])

    op.create_table(
        "proposals",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("proposal_number", sa.String(32), nullable=True),
        sa.Column("client_name", sa.String(255), nullable=True),
        sa.Column("desired_credit", sa.Numeric(14, 2), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("pipeline_status", sa.String(20), nullable=False, server_default="submitted"),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("client_id", sa.String(128), nullable=True),
        sa.Column("client_email", sa.String(255), nullable=True),
        *_ownership_columns(),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    for column in ("client_id", "user_id", "created_by", "inviter_user_id", "team_id"):
        op.create_index(f"ix_proposals_{column}", "proposals", [column])


def downgrade() -> None:
    op.drop_table("proposals")
    op.drop_table("registrations")
    op.drop_table("teams")
    op.drop_table("users")
    op.drop_table("roles")
