from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from fleetdesk.db.bookingUtils import (
    balanceDue,
    changeBookingStatus,
    createBooking,
    getBookingDetails,
    recordPayment
)
from fleetdesk.db.database import getDb
from fleetdesk.errors import NotFoundError, ValidationError
from fleetdesk.models.booking import Booking
from fleetdesk.routes.owner import getOwnerOr404
from fleetdesk.schemas.booking import (
    BookingCreate,
    BookingDetailResponse,
    BookingResponse,
    BookingStatus,
    BookingStatusUpdate,
    PaymentRequest
)

router = APIRouter(prefix="/booking", tags=["Booking"])


def toBookingResponse(db: Session, booking: Booking) -> BookingResponse:
    details = getBookingDetails(db, booking.id)
    return BookingResponse(
        id=str(booking.id),
        customerName=booking.customer_name,
        customerPhone=booking.customer_phone,
        pickupLocation=booking.pickup_location,
        dropLocation=booking.drop_location,
        pickupAt=booking.pickup_at,
        dropAt=booking.drop_at,
        status=booking.status,
        vehiclesCount=booking.vehicles_count,
        totalAmount=booking.total_amount or 0,
        advanceAmount=booking.advance_amount or 0,
        advanceStatus=booking.advance_status or "pending",
        advancePaid=booking.advance_paid,
        paymentMethod=booking.payment_method,
        balanceAmount=balanceDue(booking),
        details=[
            BookingDetailResponse(
                id=str(d.id),
                vehicleId=str(d.vehicle_id),
                quantity=d.quantity,
                rate=d.rate or 0
            )
            for d in details
        ]
    )


@router.post("/{ownerId}", response_model=BookingResponse)
def newBooking(ownerId: UUID, request: BookingCreate, db: Session = Depends(getDb)):
    getOwnerOr404(db, ownerId)
    try:
        booking = createBooking(db, ownerId, request)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return toBookingResponse(db, booking)


@router.get("/{ownerId}", response_model=List[BookingResponse])
def listBookings(
    ownerId: UUID,
    status: Optional[BookingStatus] = None,
    search: Optional[str] = None,
    db: Session = Depends(getDb)
):
    query = db.query(Booking).filter(Booking.owner_id == ownerId)
    if status:
        query = query.filter(Booking.status == status.value)
    bookings = query.order_by(Booking.pickup_at.desc()).all()

    if search:
        needle = search.strip().lower()
        bookings = [
            b for b in bookings
            if needle in b.customer_name.lower() or needle in b.pickup_location.lower()
        ]

    return [toBookingResponse(db, b) for b in bookings]


@router.put("/{ownerId}/{bookingId}/status", response_model=BookingResponse)
def updateBookingStatus(
    ownerId: UUID,
    bookingId: UUID,
    request: BookingStatusUpdate,
    db: Session = Depends(getDb)
):
    try:
        booking = changeBookingStatus(db, ownerId, bookingId, request.status.value)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return toBookingResponse(db, booking)


@router.put("/{ownerId}/{bookingId}/payment", response_model=BookingResponse)
def confirmPayment(
    ownerId: UUID,
    bookingId: UUID,
    request: PaymentRequest,
    db: Session = Depends(getDb)
):
    try:
        booking = recordPayment(db, ownerId, bookingId, request.method, request.amount)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return toBookingResponse(db, booking)
