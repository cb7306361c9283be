"""Initial schema — users, catalog items, loans, reading targets, audit log.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-16

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import ENUM

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

role = ENUM("ADMIN", "LIBRARIAN", "STUDENT", name="role", create_type=False)
status = ENUM("AVAILABLE", "BORROWED", name="status", create_type=False)
report_type = ENUM("PHD", "MASTER", "BACHELOR", name="report_type", create_type=False)


def _user_fk(table: str) -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint(
        ["user_id"], ["users.id"], name=f"{table}_user_id_fkey",
        ondelete="RESTRICT", onupdate="CASCADE",
    )


def _loan_table(table: str, item_column: str, item_table: str) -> None:
    op.create_table(
        table,
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("user_id", sa.Integer, nullable=False),
        sa.Column(item_column, sa.Integer, nullable=False),
        sa.Column("borrow_date", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("return_date", sa.DateTime(timezone=True), nullable=True),
        _user_fk(table),
        sa.ForeignKeyConstraint(
            [item_column], [f"{item_table}.id"], name=f"{table}_{item_column}_fkey",
            ondelete="RESTRICT", onupdate="CASCADE",
        ),
    )


def upgrade() -> None:
    bind = op.get_bind()
    role.create(bind, checkfirst=True)
    status.create(bind, checkfirst=True)
    report_type.create(bind, checkfirst=True)

    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password", sa.Text, nullable=False),
        sa.Column("role", role, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("email", name="users_email_key"),
    )

    op.create_table(
        "books",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("author", sa.String(255), nullable=False),
        sa.Column("year", sa.Integer, nullable=False),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("isbn", sa.String(20), nullable=True),
        sa.Column("status", status, nullable=False, server_default="AVAILABLE"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "journals",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("volume", sa.Integer, nullable=False),
        sa.Column("issue", sa.Integer, nullable=False),
        sa.Column("year", sa.Integer, nullable=False),
        sa.Column("issn", sa.String(20), nullable=True),
        sa.Column("status", status, nullable=False, server_default="AVAILABLE"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "research_reports",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("author", sa.String(255), nullable=False),
        sa.Column("supervisor", sa.String(255), nullable=True),
        sa.Column("institution", sa.String(255), nullable=False),
        sa.Column("year", sa.Integer, nullable=False),
        sa.Column("type", report_type, nullable=False),
        sa.Column("status", status, nullable=False, server_default="AVAILABLE"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    _loan_table("user_books", "book_id", "books")
    _loan_table("user_journals", "journal_id", "journals")
    _loan_table("user_reports", "report_id", "research_reports")

    op.create_table(
        "book_targets",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("user_id", sa.Integer, nullable=False),
        sa.Column("year", sa.Integer, nullable=False),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column("target", sa.Integer, nullable=False),
        sa.Column("progress", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        _user_fk("book_targets"),
    )

    op.create_table(
        "audit_logs",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("user_id", sa.Integer, nullable=False),
        sa.Column("action", sa.String(50), nullable=False),
        sa.Column("entity", sa.String(50), nullable=False),
        sa.Column("details", sa.Text, nullable=True),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        _user_fk("audit_logs"),
    )

    # Open-loan lookups: "does this item have a loan with return_date IS NULL"
    op.create_index("ix_user_books_book_id", "user_books", ["book_id"])
    op.create_index("ix_user_journals_journal_id", "user_journals", ["journal_id"])
    op.create_index("ix_user_reports_report_id", "user_reports", ["report_id"])


def downgrade() -> None:
    op.drop_table("audit_logs")
    op.drop_table("book_targets")
    op.drop_table("user_reports")
    op.drop_table("user_journals")
    op.drop_table("user_books")
    op.drop_table("research_reports")
    op.drop_table("journals")
    op.drop_table("books")
    op.drop_table("users")
    bind = op.get_bind()
    report_type.drop(bind, checkfirst=True)
    status.drop(bind, checkfirst=True)
    role.drop(bind, checkfirst=True)
