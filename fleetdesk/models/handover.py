import uuid
from datetime import datetime
from sqlalchemy import Column, DateTime, ForeignKey, Integer, JSON, String
from sqlalchemy.dialects.postgresql import UUID
from fleetdesk.db.database import Base


# Inspection items every new handover starts with
DEFAULT_CHECKLIST = (
    "Fuel Level Noted",
    "Odometer Reading",
    "Exterior Inspection",
    "Interior Inspection",
    "Documents Verified",
    "Keys Handed Over",
)


class Handover(Base):
    """
    Check-out / check-in record of a vehicle handed to a customer.

    checklist is a list of {"label": str, "checked": bool}.
    """
    __tablename__ = "handovers"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_id = Column(UUID(as_uuid=True), ForeignKey("owners.id"), nullable=False)
    booking_id = Column(UUID(as_uuid=True), ForeignKey("bookings.id"), nullable=True)
    vehicle_id = Column(UUID(as_uuid=True), ForeignKey("vehicles.id"), nullable=False)
    customer_name = Column(String, nullable=False)
    location = Column(String, nullable=False)
    checkout_at = Column(DateTime, nullable=False)
    return_at = Column(DateTime, nullable=True)
    status = Column(String, nullable=False, default="Pending")
    fuel_level = Column(Integer, nullable=False, default=100)  # percent
    odometer_out = Column(Integer, nullable=False)
    odometer_in = Column(Integer, nullable=True)
    remarks = Column(String, nullable=True)
    checklist = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, default=datetime.utcnow)
