"""add competitor pricing pair constraints

Revision ID: 8b2e4d6f0a13
Revises: 3f1a9c2d7b10
Create Date: 2026-10-02 16:40:07.902114
"""

from typing import Sequence, Union

from alembic import op


# revision identifiers, used by Alembic.
revision: str = "8b2e4d6f0a13"
down_revision: Union[str, Sequence[str], None] = "3f1a9c2d7b10"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # SQLite-safe batch migration
    with op.batch_alter_table("competitor_pricing", recreate="always") as batch_op:
        # one current price per competitor/product pair
        batch_op.create_unique_constraint(
            "uq_competitor_pricing_pair",
            ["competitor_id", "product_id"],
        )

        batch_op.create_check_constraint(
            "ck_price_non_negative",
            "price >= 0",
        )


def downgrade() -> None:
    """Downgrade schema."""
    with op.batch_alter_table("competitor_pricing", recreate="always") as batch_op:
        batch_op.drop_constraint("ck_price_non_negative", type_="check")
        batch_op.drop_constraint("uq_competitor_pricing_pair", type_="unique")
