from pydantic import BaseModel, Field
from typing import Optional
from enum import Enum


class DriverStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class VehicleStatus(str, Enum):
    AVAILABLE = "available"
    RENTED = "rented"
    MAINTENANCE = "maintenance"


class DriverCreate(BaseModel):
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    licenseNo: str = Field(..., min_length=1)

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Suresh Kumar",
                "phone": "9876543210",
                "licenseNo": "GA0120190012345"
            }
        }


class DriverStatusUpdate(BaseModel):
    status: DriverStatus


class DriverResponse(BaseModel):
    id: str
    name: str
    phone: str
    licenseNo: str
    currentLocation: Optional[str] = None
    status: DriverStatus


class VehicleCreate(BaseModel):
    modelName: str = Field(..., min_length=1)
    registrationNo: str = Field(..., min_length=1)
    category: str
    fuel: str
    transmission: str
    dailyRate: float = Field(default=0, ge=0)

    class Config:
        json_schema_extra = {
            "example": {
                "modelName": "Maruti Swift",
                "registrationNo": "GA-03-X-1234",
                "category": "Hatchback",
                "fuel": "Petrol",
                "transmission": "Manual",
                "dailyRate": 1800
            }
        }


class VehicleStatusUpdate(BaseModel):
    status: VehicleStatus


class VehicleResponse(BaseModel):
    id: str
    modelName: str
    registrationNo: str
    category: str
    fuel: str
    transmission: str
    dailyRate: float
    status: VehicleStatus
