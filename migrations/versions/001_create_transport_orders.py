"""Create transport orders table

Revision ID: 001_create_transport_orders
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_create_transport_orders'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create tms_transport_order table"""

    op.create_table(
        'tms_transport_order',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('transport_unit', sa.String(length=20), nullable=True),
        sa.Column('source_location', sa.String(length=100), nullable=True),
        sa.Column('target_location', sa.String(length=100), nullable=True),
        sa.Column('target_location_group', sa.String(length=100), nullable=True),
        sa.Column('priority', sa.Integer(), nullable=False, server_default='3'),
        sa.Column('state', sa.String(length=20), nullable=False, server_default='CREATED'),
        sa.Column('creation_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('date_updated', sa.DateTime(timezone=True), nullable=False),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('problem_message', sa.Text(), nullable=True),
        sa.Column('problem_number', sa.Integer(), nullable=True),
        sa.Column('problem_occurred', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint(
            "state IN ('CREATED', 'INITIALIZED', 'STARTED', 'INTERRUPTED', "
            "'ONFAILURE', 'CANCELED', 'FINISHED')",
            name='chk_transport_order_state',
        ),
        sa.CheckConstraint('priority BETWEEN 1 AND 5', name='chk_transport_order_priority'),
    )

    # Индексы для поиска заказов по транспортной единице
    op.create_index('idx_transport_order_unit', 'tms_transport_order', ['transport_unit'], unique=False)
    op.create_index('idx_transport_order_state', 'tms_transport_order', ['state'], unique=False)
    op.create_index(
        'idx_transport_order_unit_state', 'tms_transport_order', ['transport_unit', 'state'], unique=False
    )


def downgrade() -> None:
    """Drop tms_transport_order table"""
    op.drop_index('idx_transport_order_unit_state', table_name='tms_transport_order')
    op.drop_index('idx_transport_order_state', table_name='tms_transport_order')
    op.drop_index('idx_transport_order_unit', table_name='tms_transport_order')
    op.drop_table('tms_transport_order')
