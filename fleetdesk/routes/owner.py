from datetime import datetime
from uuid import UUID, uuid4

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fleetdesk.config import get_settings
from fleetdesk.db.database import getDb
from fleetdesk.models.owner import Owner
from fleetdesk.schemas.owner import (
    GstUpdate,
    LocationsUpdate,
    OwnerRegisterRequest,
    OwnerResponse
)

router = APIRouter(prefix="/owner", tags=["Owner"])


def toOwnerResponse(owner: Owner) -> OwnerResponse:
    return OwnerResponse(
        id=str(owner.id),
        fullName=owner.full_name,
        businessName=owner.business_name,
        email=owner.email,
        phone=owner.phone,
        businessAddress=owner.business_address,
        baseLocation=owner.base_location,
        serviceLocations=owner.service_locations or [],
        isGstEnabled=bool(owner.is_gst_enabled),
        gstType=owner.gst_type,
        gstNumber=owner.gst_number,
        onboardingStep=owner.onboarding_step,
        onboardingCompletedAt=owner.onboarding_completed_at
    )


def getOwnerOr404(db: Session, ownerId: UUID) -> Owner:
    owner = db.query(Owner).filter(Owner.id == ownerId).first()
    if not owner:
        raise HTTPException(status_code=404, detail="Owner not found")
    return owner


# ============================================
# ONBOARDING: identity -> GST -> locations
# ============================================

@router.post("/register", response_model=OwnerResponse)
def registerOwner(request: OwnerRegisterRequest, db: Session = Depends(getDb)):
    """First onboarding screen. Starts the owner at the GST step."""
    baseLocation = get_settings().DEFAULT_BASE_LOCATION
    try:
        owner = Owner(
            id=uuid4(),
            full_name=request.fullName.strip(),
            business_name=request.businessName.strip(),
            email=request.email,
            phone=request.phone,
            business_address=request.businessAddress,
            base_location=baseLocation,
            service_locations=[baseLocation],
            onboarding_step=2
        )
        db.add(owner)
        db.commit()
        db.refresh(owner)
        return toOwnerResponse(owner)

    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Email already registered")


@router.get("/{ownerId}", response_model=OwnerResponse)
def getOwner(ownerId: UUID, db: Session = Depends(getDb)):
    return toOwnerResponse(getOwnerOr404(db, ownerId))


@router.put("/{ownerId}/gst", response_model=OwnerResponse)
def updateGst(ownerId: UUID, request: GstUpdate, db: Session = Depends(getDb)):
    owner = getOwnerOr404(db, ownerId)

    if request.isGstEnabled and not (request.gstNumber or "").strip():
        raise HTTPException(status_code=400, detail="GSTIN is required when GST is enabled")

    owner.is_gst_enabled = request.isGstEnabled
    owner.gst_type = request.gstType if request.isGstEnabled else None
    owner.gst_number = request.gstNumber.strip().upper() if request.isGstEnabled else None
    owner.onboarding_step = max(owner.onboarding_step or 1, 3)
    db.commit()
    db.refresh(owner)
    return toOwnerResponse(owner)


@router.put("/{ownerId}/locations", response_model=OwnerResponse)
def updateLocations(ownerId: UUID, request: LocationsUpdate, db: Session = Depends(getDb)):
    """Last onboarding screen. Completes onboarding."""
    owner = getOwnerOr404(db, ownerId)

    locations = []
    for loc in request.locations:
        loc = loc.strip()
        if loc and loc not in locations:
            locations.append(loc)
    if not locations:
        raise HTTPException(status_code=400, detail="Select at least one location")

    owner.service_locations = locations
    owner.base_location = locations[0]
    if owner.onboarding_completed_at is None:
        owner.onboarding_completed_at = datetime.utcnow()
    db.commit()
    db.refresh(owner)
    return toOwnerResponse(owner)
