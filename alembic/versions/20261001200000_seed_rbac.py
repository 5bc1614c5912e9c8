"""Seed the permission catalogue, built-in roles and their default grants.

Revision ID: 20261001200000
Revises: 20261001100000
Create Date: 2026-10-01

"""
from typing import Sequence, Union

from alembic import op
from sqlalchemy.orm import Session

from inkwell.services.seed import seed_rbac

revision: str = "20261001200000"
down_revision: Union[str, None] = "20261001100000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # seed_rbac only inserts missing rows, so this is also safe on a pre-seeded database.
    session = Session(bind=op.get_bind())
    seed_rbac(session)


def downgrade() -> None:
    op.execute("DELETE FROM role_permissions")
    op.execute("DELETE FROM user_roles")
    op.execute("DELETE FROM roles")
    op.execute("DELETE FROM permissions")
