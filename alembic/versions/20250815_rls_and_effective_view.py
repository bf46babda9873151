"""Predicados de auth, trigger de novo usuário, RLS e view sensor_readings_effective

Revision ID: 20250815_rls_and_effective_view
Revises: 20250801_init_schema
Create Date: 2025-08-15 18:30:00

"""
from typing import Sequence, Union

from alembic import op

from sensorhub.db import views

# revision identifiers, used by Alembic.
revision: str = "20250815_rls_and_effective_view"
down_revision: Union[str, None] = "20250801_init_schema"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute(views.AUTH_UID_SHIM_SQL)
    op.execute(views.PREDICATE_FUNCTIONS_SQL)
    op.execute(views.NEW_USER_TRIGGER_SQL)

    for stmt in views.rls_policies_sql():
        op.execute(stmt)

    # Battery só para admin; o resto premium (gerado de FIELD_POLICY)
    op.execute(views.effective_view_sql())


def downgrade() -> None:
    op.execute(views.DROP_EFFECTIVE_VIEW_SQL)

    for stmt in views.drop_rls_policies_sql():
        op.execute(stmt)

    op.execute(views.DROP_NEW_USER_TRIGGER_SQL)
    op.execute(views.DROP_PREDICATE_FUNCTIONS_SQL)
