"""
Allocation Engine

Driver / vehicle assignment for the pick-up and drop legs of upcoming
bookings:
1. Load the owner's active bookings (BOOKED, ONGOING) from today onwards
2. Derive and sort the legs (see legResolver)
3. Allocate / reallocate a driver (and a vehicle, for Drop legs) to a leg

Legs are rebuilt from the database on every call; after allocate() the
caller reloads the worklist instead of patching the leg it holds.
"""
import logging
from datetime import date, datetime, time
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fleetdesk.db import fleetQueries
from fleetdesk.db.legResolver import derive_legs, filter_legs, sort_legs
from fleetdesk.errors import AllocationValidationError, NotFoundError, StorageError
from fleetdesk.models.allocation import Allocation
from fleetdesk.models.booking import ACTIVE_BOOKING_STATUSES
from fleetdesk.models.driver import Driver
from fleetdesk.models.vehicle import Vehicle
from fleetdesk.schemas.allocation import Leg, LegType

logger = logging.getLogger(__name__)


# ============================================
# WORKLIST
# ============================================

def load_worklist(
    db: Session,
    owner_id,
    today: Optional[date] = None,
    search: Optional[str] = None,
    leg_type: Optional[LegType] = None
) -> List[Leg]:
    """
    Sorted legs for every active booking whose pickup is today or later.
    Completed / cancelled bookings and past pickups are left out.
    """
    if today is None:
        today = date.today()
    pickup_from = datetime.combine(today, time.min)

    try:
        bookings = fleetQueries.query_bookings(db, owner_id, ACTIVE_BOOKING_STATUSES, pickup_from)
        lines = fleetQueries.query_booking_details(db, [b.id for b in bookings])
        allocations = fleetQueries.query_allocations(db, owner_id, [line.bookingDetailId for line in lines])
        drivers = fleetQueries.query_drivers(db, owner_id)
        vehicles = fleetQueries.query_vehicles(db, owner_id)
    except SQLAlchemyError as e:
        raise StorageError(f"Could not load allocations: {e}") from e

    legs = sort_legs(derive_legs(lines, allocations, drivers, vehicles))
    logger.debug(
        "Worklist for owner %s: %d bookings, %d legs, %d unallocated",
        owner_id, len(bookings), len(legs), sum(1 for leg in legs if not leg.isAllocated)
    )
    return filter_legs(legs, search=search, leg_type=leg_type)


def get_leg(db: Session, owner_id, booking_detail_id, leg_type: LegType) -> Leg:
    """The current state of a single leg."""
    try:
        line = fleetQueries.query_booking_line(db, owner_id, booking_detail_id)
    except ValueError:
        raise NotFoundError("Booking detail not found")
    except SQLAlchemyError as e:
        raise StorageError(f"Could not load leg: {e}") from e
    if line is None:
        raise NotFoundError("Booking detail not found")

    try:
        allocations = fleetQueries.query_allocations(db, owner_id, [line.bookingDetailId])
        drivers = fleetQueries.query_drivers(db, owner_id)
        vehicles = fleetQueries.query_vehicles(db, owner_id)
    except SQLAlchemyError as e:
        raise StorageError(f"Could not load leg: {e}") from e

    legs = derive_legs([line], allocations, drivers, vehicles)
    return next(leg for leg in legs if leg.legType == leg_type)


# ============================================
# CANDIDATES
# ============================================

def list_active_drivers(db: Session, owner_id) -> List[Driver]:
    return fleetQueries.query_active_drivers(db, owner_id)


def list_available_vehicles(db: Session, owner_id) -> List[Vehicle]:
    return fleetQueries.query_available_vehicles(db, owner_id)


# ============================================
# ALLOCATE / REALLOCATE
# ============================================

def _owned(db: Session, model, row_id, owner_id):
    try:
        row_id = fleetQueries.as_uuid(row_id)
    except ValueError:
        return None
    row = db.query(model).filter(model.id == row_id).first()
    if row is None or row.owner_id != fleetQueries.as_uuid(owner_id):
        return None
    return row


def validate_allocation(db: Session, owner_id, leg: Leg, driver_id, vehicle_id=None):
    """
    Checks run before any write.

    - a driver must be selected, belong to the owner and be active
    - Pick legs never carry a vehicle (the booked vehicle goes out)
    - a Drop vehicle must belong to the owner; its status is not checked
      because the drop itself frees it
    """
    if not driver_id:
        raise AllocationValidationError("No driver selected")

    driver = _owned(db, Driver, driver_id, owner_id)
    if driver is None:
        raise AllocationValidationError("Driver not found for this owner")
    if driver.status != "active":
        raise AllocationValidationError(f"Driver {driver.full_name} is not active")

    if not vehicle_id:
        return driver, None

    if leg.legType == LegType.PICK:
        raise AllocationValidationError("Pick legs cannot be assigned a vehicle")

    vehicle = _owned(db, Vehicle, vehicle_id, owner_id)
    if vehicle is None:
        raise AllocationValidationError("Vehicle not found for this owner")

    return driver, vehicle


def allocate(db: Session, owner_id, leg: Leg, driver_id, vehicle_id=None) -> Allocation:
    """
    Assign a driver (and optionally a vehicle, Drop only) to a leg.

    Creates the allocation on first assignment and updates it afterwards,
    so calling it twice with the same arguments leaves one identical row.
    Leaving out vehicle_id keeps whatever vehicle was allocated before.
    """
    driver, vehicle = validate_allocation(db, owner_id, leg, driver_id, vehicle_id)

    try:
        allocation = fleetQueries.upsert_allocation(
            db,
            owner_id,
            leg.bookingDetailId,
            leg.legType.value,
            driver.id,
            vehicle.id if vehicle else None,
            location=leg.location,
            date_time=leg.dateTime
        )
        db.commit()
        db.refresh(allocation)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(
            "Allocation failed for %s/%s: %s", leg.bookingDetailId, leg.legType.value, e
        )
        raise StorageError(f"Could not save allocation: {e}") from e

    logger.info(
        "Allocated %s leg of booking detail %s to driver %s%s",
        leg.legType.value,
        leg.bookingDetailId,
        driver.full_name,
        f" with vehicle {vehicle.registration_no}" if vehicle else ""
    )
    return allocation
