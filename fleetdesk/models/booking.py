import uuid
from datetime import datetime
from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.dialects.postgresql import UUID
from fleetdesk.db.database import Base


# Bookings that still need drivers moved around
ACTIVE_BOOKING_STATUSES = ("BOOKED", "ONGOING")


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_id = Column(UUID(as_uuid=True), ForeignKey("owners.id"), nullable=False)
    customer_name = Column(String, nullable=False)
    customer_phone = Column(String, nullable=True)
    pickup_location = Column(String, nullable=False)
    drop_location = Column(String, nullable=False)
    pickup_at = Column(DateTime, nullable=False)
    drop_at = Column(DateTime, nullable=False)
    status = Column(String, nullable=False, default="BOOKED")
    vehicles_count = Column(Integer, nullable=False, default=1)
    total_amount = Column(Float, default=0)
    advance_amount = Column(Float, default=0)
    advance_status = Column(String, nullable=False, default="pending")  # pending, partial, paid
    advance_paid = Column(Float, nullable=True)
    payment_method = Column(String, nullable=True)  # upi, cash
    created_at = Column(DateTime, default=datetime.utcnow)
