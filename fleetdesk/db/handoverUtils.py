"""
Vehicle handover helpers.

A handover moves Pending -> Checked Out -> Returned and never back.
Returning a vehicle records the odometer reading it came back with.
"""
import logging
import uuid
from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from fleetdesk.db.bookingUtils import toNaiveUtc
from fleetdesk.db.fleetQueries import as_uuid
from fleetdesk.errors import NotFoundError, ValidationError
from fleetdesk.models.booking import Booking
from fleetdesk.models.handover import DEFAULT_CHECKLIST, Handover
from fleetdesk.models.vehicle import Vehicle
from fleetdesk.schemas.handover import HandoverCreate

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS = {
    "Pending": {"Checked Out"},
    "Checked Out": {"Returned"},
    "Returned": set(),
}


def createHandover(db: Session, ownerId, request: HandoverCreate) -> Handover:
    ownerId = as_uuid(ownerId)
    try:
        vehicleId = as_uuid(request.vehicleId)
        bookingId = as_uuid(request.bookingId)
    except ValueError:
        raise ValidationError("Invalid vehicle or booking id")

    vehicle = db.query(Vehicle).filter(Vehicle.id == vehicleId).first()
    if not vehicle or vehicle.owner_id != ownerId:
        raise ValidationError(f"Vehicle {request.vehicleId} not found")
    if bookingId is not None:
        booking = db.query(Booking).filter(Booking.id == bookingId).first()
        if not booking or booking.owner_id != ownerId:
            raise ValidationError(f"Booking {request.bookingId} not found")

    checkoutAt = toNaiveUtc(request.checkoutAt)
    returnAt = toNaiveUtc(request.returnAt) if request.returnAt else None
    if returnAt is not None and returnAt <= checkoutAt:
        raise ValidationError("Return time must be after checkout time")

    handover = Handover(
        id=uuid.uuid4(),
        owner_id=ownerId,
        booking_id=bookingId,
        vehicle_id=vehicleId,
        customer_name=request.customerName.strip(),
        location=request.location.strip(),
        checkout_at=checkoutAt,
        return_at=returnAt,
        status="Pending",
        fuel_level=request.fuelLevel,
        odometer_out=request.odometerOut,
        remarks=request.remarks,
        checklist=[{"label": label, "checked": False} for label in DEFAULT_CHECKLIST]
    )
    db.add(handover)
    db.commit()
    db.refresh(handover)
    logger.info("Handover %s created for %s", handover.id, handover.customer_name)
    return handover


def getHandover(db: Session, ownerId, handoverId) -> Handover:
    handover = db.query(Handover).filter(Handover.id == as_uuid(handoverId)).first()
    if not handover or handover.owner_id != as_uuid(ownerId):
        raise NotFoundError("Handover not found")
    return handover


def toggleChecklistItem(db: Session, handover: Handover, index: int) -> Handover:
    checklist = [dict(item) for item in handover.checklist or []]
    if index < 0 or index >= len(checklist):
        raise ValidationError(f"Checklist item {index} does not exist")
    if handover.status == "Returned":
        raise ValidationError("Returned handovers cannot be changed")

    checklist[index]["checked"] = not checklist[index]["checked"]
    # JSON columns only notice reassignment
    handover.checklist = checklist
    db.commit()
    db.refresh(handover)
    return handover


def changeHandoverStatus(
    db: Session,
    handover: Handover,
    newStatus: str,
    odometerIn: Optional[int] = None,
    fuelLevel: Optional[int] = None
) -> Handover:
    if newStatus == handover.status:
        return handover
    if newStatus not in ALLOWED_TRANSITIONS.get(handover.status, set()):
        raise ValidationError(f"Cannot move handover from {handover.status} to {newStatus}")

    if newStatus == "Returned":
        if odometerIn is None:
            raise ValidationError("Odometer reading is required on return")
        if odometerIn < handover.odometer_out:
            raise ValidationError("Odometer in cannot be lower than odometer out")
        handover.odometer_in = odometerIn
    if fuelLevel is not None:
        handover.fuel_level = fuelLevel

    handover.status = newStatus
    db.commit()
    db.refresh(handover)
    logger.info("Handover %s is now %s", handover.id, newStatus)
    return handover


def filterHandovers(
    handovers: Iterable[Handover],
    vehicles: Optional[Dict[str, Vehicle]] = None,
    search: Optional[str] = None,
    status: Optional[str] = None
) -> List[Handover]:
    """Search matches customer name, vehicle model or registration."""
    vehicles = vehicles or {}
    needle = search.strip().lower() if search else ""
    result = []
    for handover in handovers:
        if status and handover.status != status:
            continue
        if needle:
            vehicle = vehicles.get(str(handover.vehicle_id))
            fields = [handover.customer_name]
            if vehicle:
                fields += [vehicle.model_name, vehicle.registration_no]
            if not any(needle in f.lower() for f in fields if f):
                continue
        result.append(handover)
    return result


def summarizeHandovers(handovers: Iterable[Handover]) -> Dict[str, int]:
    counts = {status: 0 for status in ALLOWED_TRANSITIONS}
    for handover in handovers:
        counts[handover.status] = counts.get(handover.status, 0) + 1
    return counts
