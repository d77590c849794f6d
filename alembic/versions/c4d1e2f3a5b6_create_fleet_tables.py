"""create fleet tables

Revision ID: c4d1e2f3a5b6
Revises:
Create Date: 2024-11-12 09:30:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = 'c4d1e2f3a5b6'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'owners',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('full_name', sa.String(), nullable=False, server_default=''),
        sa.Column('business_name', sa.String(), nullable=False, server_default=''),
        sa.Column('email', sa.String(), nullable=True, unique=True),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('business_address', sa.String(), nullable=False, server_default=''),
        sa.Column('base_location', sa.String(), nullable=False),
        sa.Column('service_locations', sa.JSON(), nullable=False),
        sa.Column('is_gst_enabled', sa.Boolean(), default=False),
        sa.Column('gst_type', sa.String(), nullable=True),
        sa.Column('gst_number', sa.String(), nullable=True),
        sa.Column('onboarding_step', sa.Integer(), default=1),
        sa.Column('onboarding_completed_at', sa.DateTime(), nullable=True),
    )

    op.create_table(
        'vehicles',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('owner_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('owners.id'), nullable=False),
        sa.Column('model_name', sa.String(), nullable=False),
        sa.Column('registration_no', sa.String(), nullable=False),
        sa.Column('category', sa.String(), nullable=False),
        sa.Column('fuel', sa.String(), nullable=False),
        sa.Column('transmission', sa.String(), nullable=False),
        sa.Column('daily_rate', sa.Float(), nullable=False, server_default='0'),
        sa.Column('status', sa.String(), nullable=False, server_default='available'),
        sa.UniqueConstraint('owner_id', 'registration_no', name='unique_owner_registration')
    )

    op.create_table(
        'drivers',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('owner_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('owners.id'), nullable=False),
        sa.Column('full_name', sa.String(), nullable=False),
        sa.Column('phone', sa.String(), nullable=False),
        sa.Column('license_no', sa.String(), nullable=False),
        sa.Column('current_location', sa.String(), server_default='Not Assigned'),
        sa.Column('status', sa.String(), nullable=False, server_default='active'),
    )

    op.create_table(
        'bookings',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('owner_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('owners.id'), nullable=False),
        sa.Column('customer_name', sa.String(), nullable=False),
        sa.Column('customer_phone', sa.String(), nullable=True),
        sa.Column('pickup_location', sa.String(), nullable=False),
        sa.Column('drop_location', sa.String(), nullable=False),
        sa.Column('pickup_at', sa.DateTime(), nullable=False),
        sa.Column('drop_at', sa.DateTime(), nullable=False),
        sa.Column('status', sa.String(), nullable=False, server_default='BOOKED'),
        sa.Column('vehicles_count', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('total_amount', sa.Float(), server_default='0'),
        sa.Column('advance_amount', sa.Float(), server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_bookings_owner_pickup', 'bookings', ['owner_id', 'status', 'pickup_at'])

    op.create_table(
        'booking_details',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('booking_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('bookings.id'), nullable=False),
        sa.Column('vehicle_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('vehicles.id'), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('rate', sa.Float(), server_default='0'),
    )

    op.create_table(
        'allocations',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('owner_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('owners.id'), nullable=False),
        sa.Column('booking_detail_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('booking_details.id'), nullable=False),
        sa.Column('type', sa.String(), nullable=False),
        sa.Column('driver_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('drivers.id'), nullable=False),
        sa.Column('vehicle_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('vehicles.id'), nullable=True),
        sa.Column('confirmed', sa.Boolean(), server_default=sa.false()),
        sa.Column('location', sa.String(), nullable=True),
        sa.Column('date_time', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('booking_detail_id', 'type', name='unique_booking_detail_leg')
    )

    op.create_table(
        'reminders',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('owner_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('owners.id'), nullable=False),
        sa.Column('vehicle_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('vehicles.id'), nullable=False),
        sa.Column('type', sa.String(), nullable=False),
        sa.Column('category', sa.String(), nullable=False),
        sa.Column('priority', sa.String(), nullable=False, server_default='Medium'),
        sa.Column('due_date', sa.Date(), nullable=False),
        sa.Column('assignee', sa.String(), nullable=True),
        sa.Column('notes', sa.String(), nullable=True),
        sa.Column('notification_methods', sa.JSON(), nullable=False),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )


def downgrade() -> None:
    op.drop_table('reminders')
    op.drop_table('allocations')
    op.drop_table('booking_details')
    op.drop_index('ix_bookings_owner_pickup', table_name='bookings')
    op.drop_table('bookings')
    op.drop_table('drivers')
    op.drop_table('vehicles')
    op.drop_table('owners')
