"""
Test configuration and fixtures.

Tests run against an in-memory SQLite database shared through a
StaticPool, so the TestClient and the `db` fixture see the same data.
"""
import os
import uuid
from datetime import datetime

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from fleetdesk.db.database import Base, getDb
from fleetdesk.main import app
from fleetdesk.models.booking import Booking
from fleetdesk.models.bookingDetail import BookingDetail
from fleetdesk.models.driver import Driver
from fleetdesk.models.owner import Owner
from fleetdesk.models.vehicle import Vehicle
from fleetdesk.models import allocation, handover, reminder  # noqa: F401

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def overrideGetDb():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[getDb] = overrideGetDb
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ============================================
# ROW FACTORIES
# ============================================

@pytest.fixture
def make_owner(db):
    def _make(name="Goa Self Drive"):
        owner = Owner(
            id=uuid.uuid4(),
            full_name="Savio Fernandes",
            business_name=name,
            business_address="Panjim",
            base_location="Panjim",
            service_locations=["Panjim"]
        )
        db.add(owner)
        db.commit()
        return owner
    return _make


@pytest.fixture
def make_vehicle(db):
    def _make(owner, registration_no="GA-03-X-1234", model_name="Maruti Swift", status="available"):
        vehicle = Vehicle(
            id=uuid.uuid4(),
            owner_id=owner.id,
            model_name=model_name,
            registration_no=registration_no,
            category="Hatchback",
            fuel="Petrol",
            transmission="Manual",
            daily_rate=1800,
            status=status
        )
        db.add(vehicle)
        db.commit()
        return vehicle
    return _make


@pytest.fixture
def make_driver(db):
    def _make(owner, full_name="Suresh Kumar", status="active"):
        driver = Driver(
            id=uuid.uuid4(),
            owner_id=owner.id,
            full_name=full_name,
            phone="+91 9823012345",
            license_no="GA0120190012345",
            status=status
        )
        db.add(driver)
        db.commit()
        return driver
    return _make


@pytest.fixture
def make_booking(db):
    def _make(owner, vehicles, pickup_at, drop_at, status="BOOKED", customer_name="Timothy D'Souza"):
        booking = Booking(
            id=uuid.uuid4(),
            owner_id=owner.id,
            customer_name=customer_name,
            pickup_location="Panjim Airport",
            drop_location="Calangute Beach",
            pickup_at=pickup_at,
            drop_at=drop_at,
            status=status,
            vehicles_count=len(vehicles),
            created_at=datetime(2024, 11, 1)
        )
        db.add(booking)
        details = []
        for vehicle in vehicles:
            detail = BookingDetail(id=uuid.uuid4(), booking_id=booking.id, vehicle_id=vehicle.id, quantity=1)
            db.add(detail)
            details.append(detail)
        db.commit()
        return booking, details
    return _make
