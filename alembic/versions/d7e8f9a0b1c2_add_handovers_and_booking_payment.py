"""add handovers and booking payment

Revision ID: d7e8f9a0b1c2
Revises: c4d1e2f3a5b6
Create Date: 2024-11-26 11:15:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = 'd7e8f9a0b1c2'
down_revision: Union[str, None] = 'c4d1e2f3a5b6'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column('bookings', sa.Column('advance_status', sa.String(), nullable=False, server_default='pending'))
    op.add_column('bookings', sa.Column('advance_paid', sa.Float(), nullable=True))
    op.add_column('bookings', sa.Column('payment_method', sa.String(), nullable=True))

    op.create_table(
        'handovers',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('owner_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('owners.id'), nullable=False),
        sa.Column('booking_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('bookings.id'), nullable=True),
        sa.Column('vehicle_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('vehicles.id'), nullable=False),
        sa.Column('customer_name', sa.String(), nullable=False),
        sa.Column('location', sa.String(), nullable=False),
        sa.Column('checkout_at', sa.DateTime(), nullable=False),
        sa.Column('return_at', sa.DateTime(), nullable=True),
        sa.Column('status', sa.String(), nullable=False, server_default='Pending'),
        sa.Column('fuel_level', sa.Integer(), nullable=False, server_default='100'),
        sa.Column('odometer_out', sa.Integer(), nullable=False),
        sa.Column('odometer_in', sa.Integer(), nullable=True),
        sa.Column('remarks', sa.String(), nullable=True),
        sa.Column('checklist', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_handovers_owner_status', 'handovers', ['owner_id', 'status'])


def downgrade() -> None:
    op.drop_index('ix_handovers_owner_status', table_name='handovers')
    op.drop_table('handovers')
    op.drop_column('bookings', 'payment_method')
    op.drop_column('bookings', 'advance_paid')
    op.drop_column('bookings', 'advance_status')
