import uuid
from sqlalchemy import Column, Float, ForeignKey, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from fleetdesk.db.database import Base


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_id = Column(UUID(as_uuid=True), ForeignKey("owners.id"), nullable=False)
    model_name = Column(String, nullable=False)  # e.g. "Maruti Swift"
    registration_no = Column(String, nullable=False)
    category = Column(String, nullable=False)  # Hatchback, Sedan, SUV ...
    fuel = Column(String, nullable=False)
    transmission = Column(String, nullable=False)
    daily_rate = Column(Float, nullable=False, default=0)
    status = Column(String, nullable=False, default="available")

    __table_args__ = (
        UniqueConstraint('owner_id', 'registration_no', name='unique_owner_registration'),
    )
