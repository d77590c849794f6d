import uuid
from sqlalchemy import Column, Float, ForeignKey, Integer
from sqlalchemy.dialects.postgresql import UUID
from fleetdesk.db.database import Base


class BookingDetail(Base):
    """One line item of a booking: the vehicle reserved and how many."""
    __tablename__ = "booking_details"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    booking_id = Column(UUID(as_uuid=True), ForeignKey("bookings.id"), nullable=False)
    vehicle_id = Column(UUID(as_uuid=True), ForeignKey("vehicles.id"), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    rate = Column(Float, default=0)
