"""Create location table

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Creates the `location` table, the persistent geocoding cache.
How:   One row per distinct search string; the unique constraint on
       search_query backs the insert-if-absent write.

Rollback: downgrade() drops the table. The cache refills from LocationIQ
on demand, so nothing irreplaceable is lost.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "location",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "search_query",
            sa.Text(),
            nullable=False,
            comment="City string as entered by the user (cache key)",
        ),
        sa.Column(
            "formatted_query",
            sa.Text(),
            nullable=False,
            server_default=sa.text("''"),
            comment="Display name returned by the geocoding provider",
        ),
        sa.Column("latitude", sa.Float(), nullable=False, comment="Latitude in decimal degrees"),
        sa.Column("longitude", sa.Float(), nullable=False, comment="Longitude in decimal degrees"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("search_query", name="uq_location_search_query"),
    )
    op.create_index("ix_location_search_query", "location", ["search_query"])


def downgrade() -> None:
    op.drop_index("ix_location_search_query", table_name="location")
    op.drop_table("location")
