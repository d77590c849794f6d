from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from enum import Enum


class BookingStatus(str, Enum):
    BOOKED = "BOOKED"
    ONGOING = "ONGOING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class PaymentMethod(str, Enum):
    UPI = "upi"
    CASH = "cash"


class AdvanceStatus(str, Enum):
    PENDING = "pending"
    PARTIAL = "partial"
    PAID = "paid"


class BookingLineCreate(BaseModel):
    vehicleId: str
    quantity: int = Field(default=1, ge=1)
    rate: float = Field(default=0, ge=0)


class BookingCreate(BaseModel):
    customerName: str = Field(..., min_length=1)
    customerPhone: Optional[str] = None
    pickupLocation: str
    dropLocation: str
    pickupAt: datetime
    dropAt: datetime
    vehicles: List[BookingLineCreate]
    totalAmount: float = Field(default=0, ge=0)
    advanceAmount: float = Field(default=0, ge=0)

    class Config:
        json_schema_extra = {
            "example": {
                "customerName": "Timothy D'Souza",
                "customerPhone": "+91 9876543210",
                "pickupLocation": "Panjim Airport",
                "dropLocation": "Calangute Beach",
                "pickupAt": "2024-11-20T10:00:00",
                "dropAt": "2024-11-22T10:00:00",
                "vehicles": [{"vehicleId": "0b7d3c1e-2f7e-4b55-9a54-65a1f1a0b9e3", "quantity": 1, "rate": 1800}],
                "totalAmount": 3600,
                "advanceAmount": 1000
            }
        }


class BookingStatusUpdate(BaseModel):
    status: BookingStatus


class PaymentRequest(BaseModel):
    method: PaymentMethod
    amount: Optional[float] = Field(default=None, ge=0)  # cash only

    class Config:
        json_schema_extra = {
            "example": {"method": "cash", "amount": 3500}
        }


class BookingDetailResponse(BaseModel):
    id: str
    vehicleId: str
    quantity: int
    rate: float


class BookingResponse(BaseModel):
    id: str
    customerName: str
    customerPhone: Optional[str] = None
    pickupLocation: str
    dropLocation: str
    pickupAt: datetime
    dropAt: datetime
    status: BookingStatus
    vehiclesCount: int
    totalAmount: float
    advanceAmount: float
    advanceStatus: AdvanceStatus = AdvanceStatus.PENDING
    advancePaid: Optional[float] = None
    paymentMethod: Optional[PaymentMethod] = None
    balanceAmount: float
    details: List[BookingDetailResponse] = []
