import uuid
from datetime import datetime
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from fleetdesk.db.database import Base


class Allocation(Base):
    """
    Driver (and, for Drop legs, vehicle) assigned to one leg of a booking
    detail.

    Legs themselves are never stored: a leg is identified by
    (booking_detail_id, type) and is rebuilt from the booking on every read.
    Only Drop rows may carry vehicle_id.
    """
    __tablename__ = "allocations"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_id = Column(UUID(as_uuid=True), ForeignKey("owners.id"), nullable=False)
    booking_detail_id = Column(UUID(as_uuid=True), ForeignKey("booking_details.id"), nullable=False)
    type = Column(String, nullable=False)  # Pick, Drop
    driver_id = Column(UUID(as_uuid=True), ForeignKey("drivers.id"), nullable=False)
    vehicle_id = Column(UUID(as_uuid=True), ForeignKey("vehicles.id"), nullable=True)
    confirmed = Column(Boolean, default=False)
    location = Column(String, nullable=True)
    date_time = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # One allocation per leg
    __table_args__ = (
        UniqueConstraint('booking_detail_id', 'type', name='unique_booking_detail_leg'),
    )
