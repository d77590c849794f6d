from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from enum import Enum


class HandoverStatus(str, Enum):
    PENDING = "Pending"
    CHECKED_OUT = "Checked Out"
    RETURNED = "Returned"


class ChecklistItem(BaseModel):
    label: str
    checked: bool = False


class HandoverCreate(BaseModel):
    vehicleId: str
    bookingId: Optional[str] = None
    customerName: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    checkoutAt: datetime
    returnAt: Optional[datetime] = None
    fuelLevel: int = Field(default=100, ge=0, le=100)
    odometerOut: int = Field(..., ge=0)
    remarks: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "vehicleId": "0b7d3c1e-2f7e-4b55-9a54-65a1f1a0b9e3",
                "customerName": "Timothy D'Souza",
                "location": "Panjim Airport",
                "checkoutAt": "2024-11-20T10:30:00",
                "returnAt": "2024-11-20T17:00:00",
                "fuelLevel": 75,
                "odometerOut": 24500,
                "remarks": "Handle with care, new vehicle."
            }
        }


class HandoverStatusUpdate(BaseModel):
    status: HandoverStatus
    # Readings taken when the vehicle comes back
    odometerIn: Optional[int] = Field(default=None, ge=0)
    fuelLevel: Optional[int] = Field(default=None, ge=0, le=100)


class HandoverResponse(BaseModel):
    id: str
    bookingId: Optional[str] = None
    vehicleId: str
    vehicle: Optional[str] = None  # model name
    registration: Optional[str] = None
    customerName: str
    location: str
    checkoutAt: datetime
    returnAt: Optional[datetime] = None
    status: HandoverStatus
    fuelLevel: int
    odometerOut: int
    odometerIn: Optional[int] = None
    remarks: Optional[str] = None
    checklist: List[ChecklistItem] = []
    checklistDone: int


class HandoverSummaryResponse(BaseModel):
    pending: int
    checkedOut: int
    returned: int
