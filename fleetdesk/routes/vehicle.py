from typing import List, Optional
from uuid import UUID, uuid4

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fleetdesk.db.database import getDb
from fleetdesk.models.vehicle import Vehicle
from fleetdesk.routes.owner import getOwnerOr404
from fleetdesk.schemas.fleet import VehicleCreate, VehicleResponse, VehicleStatus, VehicleStatusUpdate

router = APIRouter(prefix="/vehicle", tags=["Vehicle"])


def toVehicleResponse(vehicle: Vehicle) -> VehicleResponse:
    return VehicleResponse(
        id=str(vehicle.id),
        modelName=vehicle.model_name,
        registrationNo=vehicle.registration_no,
        category=vehicle.category,
        fuel=vehicle.fuel,
        transmission=vehicle.transmission,
        dailyRate=vehicle.daily_rate,
        status=vehicle.status
    )


@router.post("/{ownerId}", response_model=VehicleResponse)
def addVehicle(ownerId: UUID, request: VehicleCreate, db: Session = Depends(getDb)):
    getOwnerOr404(db, ownerId)

    try:
        vehicle = Vehicle(
            id=uuid4(),
            owner_id=ownerId,
            model_name=request.modelName.strip(),
            registration_no=request.registrationNo.strip().upper(),
            category=request.category,
            fuel=request.fuel,
            transmission=request.transmission,
            daily_rate=request.dailyRate,
            status="available"
        )
        db.add(vehicle)
        db.commit()
        db.refresh(vehicle)
        return toVehicleResponse(vehicle)

    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Registration number already exists")


@router.get("/{ownerId}", response_model=List[VehicleResponse])
def listVehicles(
    ownerId: UUID,
    status: Optional[VehicleStatus] = None,
    category: Optional[str] = None,
    db: Session = Depends(getDb)
):
    query = db.query(Vehicle).filter(Vehicle.owner_id == ownerId)
    if status:
        query = query.filter(Vehicle.status == status.value)
    if category:
        query = query.filter(Vehicle.category == category)
    vehicles = query.order_by(Vehicle.category, Vehicle.registration_no).all()
    return [toVehicleResponse(v) for v in vehicles]


@router.put("/{ownerId}/{vehicleId}/status", response_model=VehicleResponse)
def setVehicleStatus(ownerId: UUID, vehicleId: UUID, request: VehicleStatusUpdate, db: Session = Depends(getDb)):
    vehicle = db.query(Vehicle).filter(Vehicle.id == vehicleId, Vehicle.owner_id == ownerId).first()
    if not vehicle:
        raise HTTPException(status_code=404, detail="Vehicle not found")

    vehicle.status = request.status.value
    db.commit()
    db.refresh(vehicle)
    return toVehicleResponse(vehicle)
