"""Add hashed_password to app_user

Revision ID: 8b2e4f6a9c31
Revises: 3f1c9a7d2b10
Create Date: 2026-10-18 14:03:27.114905

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "8b2e4f6a9c31"
down_revision: Union[str, Sequence[str], None] = "3f1c9a7d2b10"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Add nullable app_user.hashed_password (existing users cannot log in until set)."""
    op.add_column(
        "app_user",
        sa.Column("hashed_password", sa.String(length=255), nullable=True),
    )


def downgrade() -> None:
    """Drop app_user.hashed_password."""
    op.drop_column("app_user", "hashed_password")
