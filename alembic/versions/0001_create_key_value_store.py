"""Create the key-value table backing the PostgreSQL storage backend

Revision ID: 0001_key_value_store
Revises:
Create Date: 2026-10-19
"""
from alembic import op


revision = "0001_key_value_store"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.execute(
        """
        CREATE TABLE IF NOT EXISTS key_value_store (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            updated_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
        );
        """
    )


def downgrade():
    op.execute(
        """
        DROP TABLE IF EXISTS key_value_store;
        """
    )
