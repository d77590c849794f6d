import uuid
from datetime import datetime
from sqlalchemy import Column, Date, DateTime, ForeignKey, JSON, String
from sqlalchemy.dialects.postgresql import UUID
from fleetdesk.db.database import Base


class Reminder(Base):
    """
    Maintenance / compliance reminder for a vehicle (insurance, PUC,
    service, EMI ...).

    The Overdue / Due Soon / Upcoming status is derived from due_date at
    read time; only completion is stored.
    """
    __tablename__ = "reminders"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_id = Column(UUID(as_uuid=True), ForeignKey("owners.id"), nullable=False)
    vehicle_id = Column(UUID(as_uuid=True), ForeignKey("vehicles.id"), nullable=False)
    type = Column(String, nullable=False)
    category = Column(String, nullable=False)
    priority = Column(String, nullable=False, default="Medium")
    due_date = Column(Date, nullable=False)
    assignee = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    notification_methods = Column(JSON, nullable=False, default=list)
    completed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
