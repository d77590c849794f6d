import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from fleetdesk.db.fleetQueries import as_uuid
from fleetdesk.errors import NotFoundError, ValidationError
from fleetdesk.models.booking import Booking
from fleetdesk.models.bookingDetail import BookingDetail
from fleetdesk.models.vehicle import Vehicle
from fleetdesk.schemas.booking import BookingCreate, PaymentMethod

logger = logging.getLogger(__name__)

# BOOKED -> ONGOING -> COMPLETED, cancellable until completed
ALLOWED_TRANSITIONS = {
    "BOOKED": {"ONGOING", "CANCELLED"},
    "ONGOING": {"COMPLETED", "CANCELLED"},
    "COMPLETED": set(),
    "CANCELLED": set(),
}


def toNaiveUtc(value: datetime) -> datetime:
    """Booking times are stored naive; offset-aware input is converted to UTC first."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def createBooking(db: Session, ownerId, request: BookingCreate) -> Booking:
    """
    Create a booking and its line items in one commit.
    Every vehicle must belong to the owner.
    """
    pickupAt = toNaiveUtc(request.pickupAt)
    dropAt = toNaiveUtc(request.dropAt)
    if dropAt <= pickupAt:
        raise ValidationError("Drop time must be after pickup time")
    if not request.vehicles:
        raise ValidationError("Select at least one vehicle")

    ownerId = as_uuid(ownerId)
    vehicleIds = []
    for line in request.vehicles:
        try:
            vehicleId = as_uuid(line.vehicleId)
        except ValueError:
            raise ValidationError(f"Invalid vehicle id {line.vehicleId}")
        vehicle = db.query(Vehicle).filter(Vehicle.id == vehicleId).first()
        if not vehicle or vehicle.owner_id != ownerId:
            raise ValidationError(f"Vehicle {line.vehicleId} not found")
        vehicleIds.append(vehicleId)

    try:
        booking = Booking(
            id=uuid.uuid4(),
            owner_id=ownerId,
            customer_name=request.customerName.strip(),
            customer_phone=request.customerPhone,
            pickup_location=request.pickupLocation,
            drop_location=request.dropLocation,
            pickup_at=pickupAt,
            drop_at=dropAt,
            status="BOOKED",
            vehicles_count=sum(line.quantity for line in request.vehicles),
            total_amount=request.totalAmount,
            advance_amount=request.advanceAmount,
            advance_status="pending"
        )
        db.add(booking)

        for line, vehicleId in zip(request.vehicles, vehicleIds):
            db.add(BookingDetail(
                id=uuid.uuid4(),
                booking_id=booking.id,
                vehicle_id=vehicleId,
                quantity=line.quantity,
                rate=line.rate
            ))

        db.commit()
        db.refresh(booking)
    except Exception:
        db.rollback()
        raise

    logger.info("Booking %s created for %s", booking.id, booking.customer_name)
    return booking


def changeBookingStatus(db: Session, ownerId, bookingId, newStatus: str) -> Booking:
    booking = db.query(Booking).filter(Booking.id == as_uuid(bookingId)).first()
    if not booking or booking.owner_id != as_uuid(ownerId):
        raise NotFoundError("Booking not found")

    if newStatus == booking.status:
        return booking

    if newStatus not in ALLOWED_TRANSITIONS.get(booking.status, set()):
        raise ValidationError(f"Cannot move booking from {booking.status} to {newStatus}")

    booking.status = newStatus
    db.commit()
    db.refresh(booking)
    logger.info("Booking %s is now %s", booking.id, newStatus)
    return booking


def getBookingDetails(db: Session, bookingId):
    return (
        db.query(BookingDetail)
        .filter(BookingDetail.booking_id == as_uuid(bookingId))
        .order_by(BookingDetail.id)
        .all()
    )


def balanceDue(booking: Booking) -> float:
    """Until a payment is recorded the planned advance is assumed."""
    total = booking.total_amount or 0
    if booking.advance_status == "pending" or booking.advance_paid is None:
        return total - (booking.advance_amount or 0)
    return total - booking.advance_paid


def recordPayment(db: Session, ownerId, bookingId, method: PaymentMethod, amount: Optional[float] = None) -> Booking:
    """
    Record the advance payment for a booking.

    - UPI always settles the full advance
    - cash settles it when amount >= advance, otherwise the advance is partial
    """
    booking = db.query(Booking).filter(Booking.id == as_uuid(bookingId)).first()
    if not booking or booking.owner_id != as_uuid(ownerId):
        raise NotFoundError("Booking not found")
    if booking.status == "CANCELLED":
        raise ValidationError("Cannot record a payment on a cancelled booking")

    advance = booking.advance_amount or 0
    if method == PaymentMethod.UPI:
        paid = advance
    else:
        if amount is None or amount <= 0:
            raise ValidationError("Enter the cash amount received")
        paid = amount

    booking.payment_method = method.value
    booking.advance_paid = paid
    booking.advance_status = "paid" if paid >= advance else "partial"
    db.commit()
    db.refresh(booking)
    logger.info("Booking %s advance %s via %s (%.2f)", booking.id, booking.advance_status, method.value, paid)
    return booking
