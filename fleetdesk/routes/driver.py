from typing import List, Optional
from uuid import UUID, uuid4

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from fleetdesk.db.database import getDb
from fleetdesk.models.driver import Driver
from fleetdesk.routes.owner import getOwnerOr404
from fleetdesk.schemas.fleet import DriverCreate, DriverResponse, DriverStatus, DriverStatusUpdate

router = APIRouter(prefix="/driver", tags=["Driver"])


def normalizePhone(phone: str) -> str:
    """Local numbers get the +91 prefix; numbers with a country code are kept."""
    phone = phone.strip()
    if phone.startswith("+"):
        return phone
    return f"+91 {phone}"


def toDriverResponse(driver: Driver) -> DriverResponse:
    return DriverResponse(
        id=str(driver.id),
        name=driver.full_name,
        phone=driver.phone,
        licenseNo=driver.license_no,
        currentLocation=driver.current_location,
        status=driver.status
    )


@router.post("/{ownerId}", response_model=DriverResponse)
def addDriver(ownerId: UUID, request: DriverCreate, db: Session = Depends(getDb)):
    getOwnerOr404(db, ownerId)

    driver = Driver(
        id=uuid4(),
        owner_id=ownerId,
        full_name=request.name.strip(),
        phone=normalizePhone(request.phone),
        license_no=request.licenseNo.strip(),
        current_location="Not Assigned",
        status="active"
    )
    db.add(driver)
    db.commit()
    db.refresh(driver)
    return toDriverResponse(driver)


@router.get("/{ownerId}", response_model=List[DriverResponse])
def listDrivers(
    ownerId: UUID,
    status: Optional[DriverStatus] = None,
    search: Optional[str] = None,
    db: Session = Depends(getDb)
):
    query = db.query(Driver).filter(Driver.owner_id == ownerId)
    if status:
        query = query.filter(Driver.status == status.value)
    drivers = query.order_by(Driver.full_name).all()

    if search:
        needle = search.strip().lower()
        drivers = [
            d for d in drivers
            if needle in d.full_name.lower() or needle in d.phone or needle in d.license_no.lower()
        ]

    return [toDriverResponse(d) for d in drivers]


@router.put("/{ownerId}/{driverId}/status", response_model=DriverResponse)
def setDriverStatus(ownerId: UUID, driverId: UUID, request: DriverStatusUpdate, db: Session = Depends(getDb)):
    driver = db.query(Driver).filter(Driver.id == driverId, Driver.owner_id == ownerId).first()
    if not driver:
        raise HTTPException(status_code=404, detail="Driver not found")

    driver.status = request.status.value
    db.commit()
    db.refresh(driver)
    return toDriverResponse(driver)
