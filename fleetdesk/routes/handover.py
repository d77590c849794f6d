from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from fleetdesk.db import fleetQueries
from fleetdesk.db.database import getDb
from fleetdesk.db.handoverUtils import (
    changeHandoverStatus,
    createHandover,
    filterHandovers,
    getHandover,
    summarizeHandovers,
    toggleChecklistItem
)
from fleetdesk.errors import NotFoundError, ValidationError
from fleetdesk.models.handover import Handover
from fleetdesk.models.vehicle import Vehicle
from fleetdesk.routes.owner import getOwnerOr404
from fleetdesk.schemas.handover import (
    ChecklistItem,
    HandoverCreate,
    HandoverResponse,
    HandoverStatus,
    HandoverStatusUpdate,
    HandoverSummaryResponse
)

router = APIRouter(prefix="/handover", tags=["Handover"])


def toHandoverResponse(handover: Handover, vehicle: Optional[Vehicle]) -> HandoverResponse:
    checklist = [ChecklistItem(**item) for item in handover.checklist or []]
    return HandoverResponse(
        id=str(handover.id),
        bookingId=str(handover.booking_id) if handover.booking_id else None,
        vehicleId=str(handover.vehicle_id),
        vehicle=vehicle.model_name if vehicle else None,
        registration=vehicle.registration_no if vehicle else None,
        customerName=handover.customer_name,
        location=handover.location,
        checkoutAt=handover.checkout_at,
        returnAt=handover.return_at,
        status=handover.status,
        fuelLevel=handover.fuel_level,
        odometerOut=handover.odometer_out,
        odometerIn=handover.odometer_in,
        remarks=handover.remarks,
        checklist=checklist,
        checklistDone=sum(1 for item in checklist if item.checked)
    )


def getHandoverOr404(db: Session, ownerId: UUID, handoverId: UUID) -> Handover:
    try:
        return getHandover(db, ownerId, handoverId)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


def getVehicle(db: Session, vehicleId) -> Optional[Vehicle]:
    return db.query(Vehicle).filter(Vehicle.id == vehicleId).first()


@router.post("/{ownerId}", response_model=HandoverResponse)
def addHandover(ownerId: UUID, request: HandoverCreate, db: Session = Depends(getDb)):
    getOwnerOr404(db, ownerId)
    try:
        handover = createHandover(db, ownerId, request)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return toHandoverResponse(handover, getVehicle(db, handover.vehicle_id))


@router.get("/{ownerId}", response_model=List[HandoverResponse])
def listHandovers(
    ownerId: UUID,
    search: Optional[str] = None,
    status: Optional[HandoverStatus] = None,
    db: Session = Depends(getDb)
):
    handovers = (
        db.query(Handover)
        .filter(Handover.owner_id == ownerId)
        .order_by(Handover.checkout_at)
        .all()
    )
    vehicles = {str(v.id): v for v in fleetQueries.query_vehicles(db, ownerId)}
    handovers = filterHandovers(
        handovers,
        vehicles=vehicles,
        search=search,
        status=status.value if status else None
    )
    return [toHandoverResponse(h, vehicles.get(str(h.vehicle_id))) for h in handovers]


@router.get("/{ownerId}/summary", response_model=HandoverSummaryResponse)
def handoverSummary(ownerId: UUID, db: Session = Depends(getDb)):
    counts = summarizeHandovers(db.query(Handover).filter(Handover.owner_id == ownerId).all())
    return HandoverSummaryResponse(
        pending=counts["Pending"],
        checkedOut=counts["Checked Out"],
        returned=counts["Returned"]
    )


@router.put("/{ownerId}/{handoverId}/checklist/{index}", response_model=HandoverResponse)
def toggleChecklist(ownerId: UUID, handoverId: UUID, index: int, db: Session = Depends(getDb)):
    handover = getHandoverOr404(db, ownerId, handoverId)
    try:
        handover = toggleChecklistItem(db, handover, index)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return toHandoverResponse(handover, getVehicle(db, handover.vehicle_id))


@router.put("/{ownerId}/{handoverId}/status", response_model=HandoverResponse)
def updateHandoverStatus(
    ownerId: UUID,
    handoverId: UUID,
    request: HandoverStatusUpdate,
    db: Session = Depends(getDb)
):
    handover = getHandoverOr404(db, ownerId, handoverId)
    try:
        handover = changeHandoverStatus(
            db, handover, request.status.value, request.odometerIn, request.fuelLevel
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return toHandoverResponse(handover, getVehicle(db, handover.vehicle_id))
