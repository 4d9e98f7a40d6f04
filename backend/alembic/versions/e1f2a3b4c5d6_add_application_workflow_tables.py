"""Add applications, document checklist and status history tables

Revision ID: e1f2a3b4c5d6
Revises:
Create Date: 2026-10-19 09:00:00.000000

Creates the applications table with its status column, the per-application
document checklist, and the append-only status history written on every
status change.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "e1f2a3b4c5d6"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "applications",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("applicant_name", sa.String(200), nullable=False),
        sa.Column("company", sa.String(200), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="Draft"),
        sa.Column("created_by", sa.String(36), nullable=False),
        sa.Column("created_by_role", sa.String(20), nullable=False),
        sa.Column("assigned_manager", sa.String(36), nullable=True),
        sa.Column("partner_id", sa.String(36), nullable=True),
        sa.Column("document_checklist_complete", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint(
            "status IN ('Draft', 'Submitted', 'Returned', 'Need More Info', 'Ready for Bank', "
            "'Sent to Bank', 'Complete', 'Rejected', 'Paid')",
            name="ck_applications_status",
        ),
    )
    op.create_index("ix_applications_status", "applications", ["status"])
    op.create_index("ix_applications_created_by", "applications", ["created_by"])
    op.create_index("ix_applications_assigned_manager", "applications", ["assigned_manager"])
    op.create_index("ix_applications_partner_id", "applications", ["partner_id"])

    op.create_table(
        "application_documents",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("application_id", sa.String(36), sa.ForeignKey("applications.id"), nullable=False),
        sa.Column("document_name", sa.String(200), nullable=False),
        sa.Column("document_category", sa.String(50), nullable=False),
        sa.Column("is_mandatory", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("is_uploaded", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("file_path", sa.String(500), nullable=True),
        sa.Column("uploaded_by", sa.String(36), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_application_documents_application_id", "application_documents", ["application_id"])

    op.create_table(
        "application_status_history",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("application_id", sa.String(36), sa.ForeignKey("applications.id"), nullable=False),
        sa.Column("previous_status", sa.String(20), nullable=True),
        sa.Column("new_status", sa.String(20), nullable=False),
        sa.Column("changed_by", sa.String(36), nullable=False),
        sa.Column("changed_by_role", sa.String(20), nullable=False),
        sa.Column("comment", sa.String(2000), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index(
        "ix_application_status_history_application_id",
        "application_status_history", ["application_id"],
    )
    op.create_index(
        "ix_application_status_history_created_at",
        "application_status_history", ["created_at"],
    )


def downgrade() -> None:
    op.drop_index("ix_application_status_history_created_at", table_name="application_status_history")
    op.drop_index("ix_application_status_history_application_id", table_name="application_status_history")
    op.drop_table("application_status_history")
    op.drop_index("ix_application_documents_application_id", table_name="application_documents")
    op.drop_table("application_documents")
    op.drop_index("ix_applications_partner_id", table_name="applications")
    op.drop_index("ix_applications_assigned_manager", table_name="applications")
    op.drop_index("ix_applications_created_by", table_name="applications")
    op.drop_index("ix_applications_status", table_name="applications")
    op.drop_table("applications")
