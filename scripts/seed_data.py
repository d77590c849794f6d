"""
Seed script to populate database with test data for development.
Run with: python scripts/seed_data.py
"""
import sys
import uuid
from datetime import date, datetime, time, timedelta
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from fleetdesk.db.database import Base, SessionLocal, engine
from fleetdesk.models.allocation import Allocation
from fleetdesk.models.booking import Booking
from fleetdesk.models.bookingDetail import BookingDetail
from fleetdesk.models.driver import Driver
from fleetdesk.models.owner import Owner
from fleetdesk.models.reminder import Reminder
from fleetdesk.models.vehicle import Vehicle


def clear_existing_data(db):
    """Clear all fleet data, children first"""
    print("Clearing existing data...")
    for model in (Allocation, Reminder, BookingDetail, Booking, Driver, Vehicle, Owner):
        db.query(model).delete()
    db.commit()
    print("✓ Existing data cleared")


def create_owner(db):
    owner = Owner(
        id=uuid.uuid4(),
        full_name="Savio Fernandes",
        business_name="Goa Self Drive",
        email="savio@goaselfdrive.in",
        phone="+91 9876543210",
        business_address="18th June Road, Panjim",
        base_location="Panjim",
        service_locations=["Panjim", "Calangute", "Margao", "Mapusa"],
        onboarding_step=3,
        onboarding_completed_at=datetime.utcnow()
    )
    db.add(owner)
    db.commit()
    print(f"✓ Created owner '{owner.business_name}'")
    return owner


def create_vehicles(db, owner):
    vehicles = [
        ("Maruti Swift", "GA-03-X-1234", "Hatchback", "Petrol", "Manual", 1800),
        ("Hyundai i20", "GA-02-B-9012", "Hatchback", "Petrol", "Manual", 2000),
        ("Toyota Innova", "GA-01-A-5678", "SUV", "Diesel", "Automatic", 3500),
        ("Hyundai Creta", "GA-12-AB-1234", "SUV", "Diesel", "Automatic", 3000),
        ("Honda City", "GA-04-C-3456", "Sedan", "Petrol", "Automatic", 2800),
    ]

    vehicle_objects = []
    for model_name, reg, category, fuel, transmission, rate in vehicles:
        vehicle = Vehicle(
            id=uuid.uuid4(),
            owner_id=owner.id,
            model_name=model_name,
            registration_no=reg,
            category=category,
            fuel=fuel,
            transmission=transmission,
            daily_rate=rate,
            status="available"
        )
        db.add(vehicle)
        vehicle_objects.append(vehicle)

    db.commit()
    print(f"✓ Created {len(vehicle_objects)} vehicles")
    return vehicle_objects


def create_drivers(db, owner):
    drivers = [
        ("Suresh Kumar", "+91 9823012345", "GA0120190012345", "active"),
        ("Ramesh Sawant", "+91 9823054321", "GA0220180054321", "active"),
        ("Amit Naik", "+91 9822011122", "GA0320200011122", "active"),
        ("Priya Deshmukh", "+91 9890033344", "GA0120170033344", "inactive"),
    ]

    driver_objects = []
    for name, phone, license_no, status in drivers:
        driver = Driver(
            id=uuid.uuid4(),
            owner_id=owner.id,
            full_name=name,
            phone=phone,
            license_no=license_no,
            status=status
        )
        db.add(driver)
        driver_objects.append(driver)

    db.commit()
    print(f"✓ Created {len(driver_objects)} drivers")
    return driver_objects


def create_bookings(db, owner, vehicles):
    """Three upcoming bookings, one of them with two vehicles"""
    tomorrow = date.today() + timedelta(days=1)
    bookings = [
        ("Timothy D'Souza", "Panjim Airport", "Calangute Beach", time(10, 30), 2, [vehicles[0]]),
        ("Priya Nair", "Calangute Beach", "Margao", time(8, 0), 3, [vehicles[3]]),
        ("Rahul Mehta", "Mapusa Bus Stand", "Panjim Airport", time(9, 0), 1, [vehicles[1], vehicles[2]]),
    ]

    for i, (customer, pickup, drop, at, days, booked) in enumerate(bookings):
        pickup_at = datetime.combine(tomorrow + timedelta(days=i), at)
        booking = Booking(
            id=uuid.uuid4(),
            owner_id=owner.id,
            customer_name=customer,
            pickup_location=pickup,
            drop_location=drop,
            pickup_at=pickup_at,
            drop_at=pickup_at + timedelta(days=days),
            status="BOOKED",
            vehicles_count=len(booked),
            total_amount=sum(v.daily_rate for v in booked) * days
        )
        db.add(booking)
        for vehicle in booked:
            db.add(BookingDetail(
                id=uuid.uuid4(),
                booking_id=booking.id,
                vehicle_id=vehicle.id,
                quantity=1,
                rate=vehicle.daily_rate
            ))

    db.commit()
    print(f"✓ Created {len(bookings)} bookings")


def create_reminders(db, owner, vehicles):
    today = date.today()
    reminders = [
        (vehicles[0], "Insurance Renewal", "Critical", "Critical", today - timedelta(days=5)),
        (vehicles[2], "Scheduled Service", "Maintenance", "High", today + timedelta(days=3)),
        (vehicles[3], "EMI Payment", "Financial", "Medium", today + timedelta(days=13)),
    ]
    for vehicle, kind, category, priority, due in reminders:
        db.add(Reminder(
            id=uuid.uuid4(),
            owner_id=owner.id,
            vehicle_id=vehicle.id,
            type=kind,
            category=category,
            priority=priority,
            due_date=due,
            notification_methods=["SMS"]
        ))
    db.commit()
    print(f"✓ Created {len(reminders)} reminders")


def main():
    print("=" * 60)
    print("SEEDING DATABASE WITH TEST DATA")
    print("=" * 60)

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()

    try:
        clear_existing_data(db)
        owner = create_owner(db)
        vehicles = create_vehicles(db, owner)
        create_drivers(db, owner)
        create_bookings(db, owner, vehicles)
        create_reminders(db, owner, vehicles)

        print("\n" + "=" * 60)
        print("✓ SEEDING COMPLETE")
        print("=" * 60)
        print(f"\nOwner ID for testing: {owner.id}")

    except Exception as e:
        print(f"\n✗ ERROR: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
