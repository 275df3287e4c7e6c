"""create_translation_cache_table

Revision ID: 4b7d2e91c0a3
Revises:
Create Date: 2026-10-19 11:42:08.517204

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4b7d2e91c0a3"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "translation_cache",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("target_lang", sa.String(16), nullable=False),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("source_mtime", sa.Float, nullable=False),
        sa.Column("updated_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("slug", "target_lang", name="uq_translation_cache_key"),
    )
    op.create_index("ix_translation_cache_slug", "translation_cache", ["slug"])


def downgrade() -> None:
    op.drop_index("ix_translation_cache_slug", table_name="translation_cache")
    op.drop_table("translation_cache")
