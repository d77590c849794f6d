from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime
from enum import Enum


class LegType(str, Enum):
    PICK = "Pick"
    DROP = "Drop"


class BookingLine(BaseModel):
    """A booking detail joined with its booking and booked vehicle."""
    bookingDetailId: str
    bookingId: str
    customerName: str
    pickupLocation: str
    dropLocation: str
    pickupAt: datetime
    dropAt: datetime
    vehicleId: str
    vehicleName: str
    registrationNo: str
    vehicleCategory: str
    fuel: str
    transmission: str
    quantity: int = 1


class Leg(BaseModel):
    """
    One half (pickup or drop) of a booking detail, as shown on the
    allocation worklist. Derived on every read, never stored.
    """
    bookingDetailId: str
    bookingId: str
    legType: LegType
    customerName: str

    # Vehicle shown for the leg. For a reallocated Drop leg this is the
    # allocated vehicle, bookedVehicleId keeps the original.
    vehicleId: str
    vehicleName: str
    registrationNo: str
    vehicleCategory: str
    fuel: str
    transmission: str
    bookedVehicleId: str

    location: str
    dateTime: datetime

    isAllocated: bool = False
    allocationId: Optional[str] = None
    confirmed: bool = False
    driverId: Optional[str] = None
    driverName: Optional[str] = None
    allocatedVehicleId: Optional[str] = None
    allocatedRegistrationNo: Optional[str] = None

    # Set only on previews built from an unsaved selection
    isPendingEdit: bool = False


class AllocateRequest(BaseModel):
    # Optional so that "no driver selected" is reported by the allocator
    driverId: Optional[str] = None
    vehicleId: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "driverId": "5f1c3a8e-6a0b-4a53-9d57-1d4c6f0a2b11",
                "vehicleId": None
            }
        }


class PendingEdit(BaseModel):
    """Driver / vehicle picked in the form but not saved yet."""
    driverId: Optional[str] = None
    vehicleId: Optional[str] = None


class AllocationResponse(BaseModel):
    id: str
    bookingDetailId: str
    legType: LegType
    driverId: str
    vehicleId: Optional[str] = None
    confirmed: bool
    location: Optional[str] = None
    dateTime: Optional[datetime] = None


class DriverCandidate(BaseModel):
    id: str
    name: str
    phone: str
    currentLocation: Optional[str] = None


class VehicleCandidate(BaseModel):
    id: str
    modelName: str
    registrationNo: str
    category: str


class CandidatesResponse(BaseModel):
    drivers: List[DriverCandidate]
    vehicles: List[VehicleCandidate]
