"""Ledger schema baseline

Revision ID: 20261019_01
Revises: None
Create Date: 2026-10-19
"""
# pylint: disable=no-member,invalid-name,wrong-import-order

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "20261019_01"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""

    op.execute("CREATE EXTENSION IF NOT EXISTS pgcrypto")

    # datetime_utc holds fixed-width UTC text; "C" collation keeps comparisons bytewise.
    op.create_table(
        "ledger_transaction",
        sa.Column("party", sa.Text(), nullable=False),
        sa.Column("datetime_utc", sa.Text(collation="C"), nullable=False),
        sa.Column("counterparty", sa.Text(), nullable=False),
        sa.Column("transaction", postgresql.JSONB(), nullable=False),
        sa.Column("created_at_utc", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.PrimaryKeyConstraint("party", "datetime_utc", name="pk_ledger_transaction"),
    )
    op.create_index(
        "ix_ledger_transaction_counterparty_datetime_utc",
        "ledger_transaction",
        ["counterparty", "datetime_utc"],
    )

    op.create_table(
        "import_queue_message",
        sa.Column("message_id", postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("payload", sa.Text(), nullable=False),
        sa.Column("source_key", sa.Text(), nullable=True),
        sa.Column("status", sa.Text(), nullable=False, server_default=sa.text("'pending'")),
        sa.Column("failure_reason", sa.Text(), nullable=True),
        sa.Column("enqueued_at_utc", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("claimed_at_utc", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_at_utc", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "status IN ('pending', 'processing', 'done', 'failed')",
            name="ck_import_queue_message_status",
        ),
    )
    op.create_index(
        "ix_import_queue_message_status_enqueued_at_utc",
        "import_queue_message",
        ["status", "enqueued_at_utc"],
    )

    op.create_table(
        "transaction_mirror",
        sa.Column("party", sa.Text(), nullable=False),
        sa.Column("counterparty", sa.Text(), nullable=False),
        sa.Column("datetime_utc", sa.DateTime(timezone=True), nullable=False),
        sa.Column("transaction", postgresql.JSONB(), nullable=False),
        sa.Column("mirrored_at_utc", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.PrimaryKeyConstraint("party", "datetime_utc", name="pk_transaction_mirror"),
    )
    op.create_index("ix_transaction_mirror_counterparty", "transaction_mirror", ["counterparty"])


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_index("ix_transaction_mirror_counterparty", table_name="transaction_mirror")
    op.drop_table("transaction_mirror")
    op.drop_index("ix_import_queue_message_status_enqueued_at_utc", table_name="import_queue_message")
    op.drop_table("import_queue_message")
    op.drop_index("ix_ledger_transaction_counterparty_datetime_utc", table_name="ledger_transaction")
    op.drop_table("ledger_transaction")
