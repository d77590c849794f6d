"""
Owner-scoped reads and the allocation write used by the allocation engine.

Every function takes the owner id explicitly; resolving which owner is
logged in happens before these are called.
"""
import uuid
from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy import and_
from sqlalchemy.orm import Session

from fleetdesk.models.allocation import Allocation
from fleetdesk.models.booking import Booking
from fleetdesk.models.bookingDetail import BookingDetail
from fleetdesk.models.driver import Driver
from fleetdesk.models.vehicle import Vehicle
from fleetdesk.schemas.allocation import BookingLine


def as_uuid(value):
    """Coerce an id coming from the API (str) to the UUID the columns expect."""
    if value is None or isinstance(value, uuid.UUID):
        return value
    return uuid.UUID(str(value))


def query_bookings(
    db: Session,
    owner_id,
    statuses: Iterable[str],
    pickup_from: datetime
) -> List[Booking]:
    return (
        db.query(Booking)
        .filter(and_(
            Booking.owner_id == as_uuid(owner_id),
            Booking.status.in_(list(statuses)),
            Booking.pickup_at >= pickup_from
        ))
        .order_by(Booking.pickup_at)
        .all()
    )


def _to_line(detail: BookingDetail, booking: Booking, vehicle: Vehicle) -> BookingLine:
    return BookingLine(
        bookingDetailId=str(detail.id),
        bookingId=str(booking.id),
        customerName=booking.customer_name,
        pickupLocation=booking.pickup_location,
        dropLocation=booking.drop_location,
        pickupAt=booking.pickup_at,
        dropAt=booking.drop_at,
        vehicleId=str(vehicle.id),
        vehicleName=vehicle.model_name,
        registrationNo=vehicle.registration_no,
        vehicleCategory=vehicle.category,
        fuel=vehicle.fuel,
        transmission=vehicle.transmission,
        quantity=detail.quantity,
    )


def query_booking_details(db: Session, booking_ids: Iterable) -> List[BookingLine]:
    """Booking details joined with their booking and booked vehicle."""
    booking_ids = list(booking_ids)
    if not booking_ids:
        return []

    rows = (
        db.query(BookingDetail, Booking, Vehicle)
        .join(Booking, BookingDetail.booking_id == Booking.id)
        .join(Vehicle, BookingDetail.vehicle_id == Vehicle.id)
        .filter(BookingDetail.booking_id.in_([as_uuid(b) for b in booking_ids]))
        .order_by(Booking.pickup_at, BookingDetail.id)
        .all()
    )
    return [_to_line(detail, booking, vehicle) for detail, booking, vehicle in rows]


def query_booking_line(db: Session, owner_id, booking_detail_id) -> Optional[BookingLine]:
    row = (
        db.query(BookingDetail, Booking, Vehicle)
        .join(Booking, BookingDetail.booking_id == Booking.id)
        .join(Vehicle, BookingDetail.vehicle_id == Vehicle.id)
        .filter(and_(
            BookingDetail.id == as_uuid(booking_detail_id),
            Booking.owner_id == as_uuid(owner_id)
        ))
        .first()
    )
    if not row:
        return None
    return _to_line(*row)


def query_allocations(db: Session, owner_id, booking_detail_ids: Optional[Iterable] = None) -> List[Allocation]:
    """Oldest first, so the newest row wins if duplicates ever exist."""
    query = db.query(Allocation).filter(Allocation.owner_id == as_uuid(owner_id))
    if booking_detail_ids is not None:
        query = query.filter(Allocation.booking_detail_id.in_([as_uuid(d) for d in booking_detail_ids]))
    return query.order_by(Allocation.created_at, Allocation.id).all()


def query_leg_allocation(db: Session, owner_id, booking_detail_id, leg_type: str) -> Optional[Allocation]:
    return (
        db.query(Allocation)
        .filter(and_(
            Allocation.owner_id == as_uuid(owner_id),
            Allocation.booking_detail_id == as_uuid(booking_detail_id),
            Allocation.type == leg_type
        ))
        .order_by(Allocation.created_at.desc(), Allocation.id.desc())
        .first()
    )


def query_drivers(db: Session, owner_id) -> List[Driver]:
    return db.query(Driver).filter(Driver.owner_id == as_uuid(owner_id)).order_by(Driver.full_name).all()


def query_active_drivers(db: Session, owner_id) -> List[Driver]:
    return (
        db.query(Driver)
        .filter(and_(Driver.owner_id == as_uuid(owner_id), Driver.status == "active"))
        .order_by(Driver.full_name)
        .all()
    )


def query_vehicles(db: Session, owner_id) -> List[Vehicle]:
    return (
        db.query(Vehicle)
        .filter(Vehicle.owner_id == as_uuid(owner_id))
        .order_by(Vehicle.category, Vehicle.registration_no)
        .all()
    )


def query_available_vehicles(db: Session, owner_id) -> List[Vehicle]:
    return (
        db.query(Vehicle)
        .filter(and_(Vehicle.owner_id == as_uuid(owner_id), Vehicle.status == "available"))
        .order_by(Vehicle.category, Vehicle.registration_no)
        .all()
    )


def upsert_allocation(
    db: Session,
    owner_id,
    booking_detail_id,
    leg_type: str,
    driver_id,
    vehicle_id=None,
    location: Optional[str] = None,
    date_time: Optional[datetime] = None
) -> Allocation:
    """
    Update the leg's allocation in place, or insert it.

    vehicle_id=None leaves an existing vehicle untouched. Does not commit.
    """
    allocation = query_leg_allocation(db, owner_id, booking_detail_id, leg_type)

    if allocation is None:
        allocation = Allocation(
            owner_id=as_uuid(owner_id),
            booking_detail_id=as_uuid(booking_detail_id),
            type=leg_type,
            location=location,
            date_time=date_time,
        )
        db.add(allocation)

    allocation.driver_id = as_uuid(driver_id)
    allocation.confirmed = True
    if vehicle_id is not None:
        allocation.vehicle_id = as_uuid(vehicle_id)

    return allocation
