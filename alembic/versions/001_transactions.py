"""Transactions table.

Revision ID: 001_transactions
Revises: None
Create Date: 2024-01-01 00:00:00.000000
"""
from __future__ import annotations

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_transactions"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "transactions",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("ticker", sa.String(20), nullable=False),
        sa.Column("transaction_type", sa.String(16), nullable=False),
        sa.Column("quantity", sa.Numeric(18, 6), nullable=False),
        sa.Column("cost_per_share", sa.Numeric(18, 4), nullable=False),
        sa.Column("currency", sa.String(3), nullable=False),
        sa.Column("transaction_date", sa.Date(), nullable=True),
        sa.Column("commission", sa.Numeric(18, 4), nullable=True),
        sa.Column("commission_currency", sa.String(3), nullable=True),
        sa.Column("exchange", sa.String(20), nullable=True),
        sa.Column("country", sa.String(50), nullable=True),
        sa.Column("company_name", sa.String(255), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true()),
        sa.Column("is_fractional", sa.Boolean(), server_default=sa.false()),
        sa.Column("fractional_multiplier", sa.Numeric(10, 8), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("idx_transactions_ticker", "transactions", ["ticker"])
    op.create_index("idx_transactions_date", "transactions", ["transaction_date"])
    op.create_index("idx_transactions_ticker_date", "transactions", ["ticker", "transaction_date"])


def downgrade() -> None:
    op.drop_index("idx_transactions_ticker_date", table_name="transactions")
    op.drop_index("idx_transactions_date", table_name="transactions")
    op.drop_index("idx_transactions_ticker", table_name="transactions")
    op.drop_table("transactions")
