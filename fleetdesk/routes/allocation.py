from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from fleetdesk.db import fleetQueries
from fleetdesk.db.allocationEngine import (
    allocate,
    get_leg,
    list_active_drivers,
    list_available_vehicles,
    load_worklist
)
from fleetdesk.db.database import getDb
from fleetdesk.db.legResolver import apply_pending_edit
from fleetdesk.errors import AllocationValidationError, NotFoundError, StorageError
from fleetdesk.schemas.allocation import (
    AllocateRequest,
    AllocationResponse,
    CandidatesResponse,
    DriverCandidate,
    Leg,
    LegType,
    PendingEdit,
    VehicleCandidate
)

router = APIRouter(prefix="/allocation", tags=["Allocation"])


@router.get("/{ownerId}/legs", response_model=List[Leg])
def getWorklist(
    ownerId: UUID,
    search: Optional[str] = None,
    legType: Optional[LegType] = None,
    db: Session = Depends(getDb)
):
    """
    Pick-up and drop legs of upcoming bookings.
    Legs still waiting for a driver come first, earliest first.
    """
    try:
        return load_worklist(db, ownerId, search=search, leg_type=legType)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{ownerId}/candidates", response_model=CandidatesResponse)
def getCandidates(ownerId: UUID, db: Session = Depends(getDb)):
    """Active drivers and available vehicles for the allocation form."""
    drivers = list_active_drivers(db, ownerId)
    vehicles = list_available_vehicles(db, ownerId)
    return CandidatesResponse(
        drivers=[
            DriverCandidate(
                id=str(d.id),
                name=d.full_name,
                phone=d.phone,
                currentLocation=d.current_location
            )
            for d in drivers
        ],
        vehicles=[
            VehicleCandidate(
                id=str(v.id),
                modelName=v.model_name,
                registrationNo=v.registration_no,
                category=v.category
            )
            for v in vehicles
        ]
    )


@router.post("/{ownerId}/legs/{bookingDetailId}/{legType}", response_model=AllocationResponse)
def allocateLeg(
    ownerId: UUID,
    bookingDetailId: UUID,
    legType: LegType,
    request: AllocateRequest,
    db: Session = Depends(getDb)
):
    """
    Allocate or reallocate a leg.

    - driverId is required
    - vehicleId is only accepted on Drop legs; leave it out to keep the
      currently allocated vehicle
    """
    try:
        leg = get_leg(db, ownerId, bookingDetailId, legType)
        allocation = allocate(db, ownerId, leg, request.driverId, request.vehicleId)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AllocationValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return AllocationResponse(
        id=str(allocation.id),
        bookingDetailId=str(allocation.booking_detail_id),
        legType=allocation.type,
        driverId=str(allocation.driver_id),
        vehicleId=str(allocation.vehicle_id) if allocation.vehicle_id else None,
        confirmed=allocation.confirmed,
        location=allocation.location,
        dateTime=allocation.date_time
    )


@router.post("/{ownerId}/legs/{bookingDetailId}/{legType}/preview", response_model=Leg)
def previewLeg(
    ownerId: UUID,
    bookingDetailId: UUID,
    legType: LegType,
    edit: PendingEdit,
    db: Session = Depends(getDb)
):
    """The leg as it would look with the unsaved selection. Nothing is written."""
    try:
        leg = get_leg(db, ownerId, bookingDetailId, legType)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return apply_pending_edit(
        leg,
        edit,
        fleetQueries.query_drivers(db, ownerId),
        fleetQueries.query_vehicles(db, ownerId)
    )
