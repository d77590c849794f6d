import uuid
from sqlalchemy import Column, String, Boolean, Integer, DateTime, JSON
from sqlalchemy.dialects.postgresql import UUID
from fleetdesk.db.database import Base


class Owner(Base):
    """
    Fleet operator (tenant). Every other table is scoped by owner_id.

    The row is created by the first onboarding screen and filled in as the
    owner walks through the wizard: identity -> GST -> service locations.
    """
    __tablename__ = "owners"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    full_name = Column(String, nullable=False, default="")
    business_name = Column(String, nullable=False, default="")
    email = Column(String, unique=True, nullable=True)
    phone = Column(String, nullable=True)
    business_address = Column(String, nullable=False, default="")

    base_location = Column(String, nullable=False)
    service_locations = Column(JSON, nullable=False, default=list)

    # GST registration (India)
    is_gst_enabled = Column(Boolean, default=False)
    gst_type = Column(String, default="Regular")
    gst_number = Column(String, nullable=True)

    # 1 = identity, 2 = GST, 3 = locations
    onboarding_step = Column(Integer, default=1)
    onboarding_completed_at = Column(DateTime, nullable=True)
