from pydantic import BaseModel, EmailStr, Field
from typing import List, Optional
from datetime import datetime


class OwnerRegisterRequest(BaseModel):
    fullName: str = Field(..., min_length=1)
    businessName: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    businessAddress: str = ""

    class Config:
        json_schema_extra = {
            "example": {
                "fullName": "Savio Fernandes",
                "businessName": "Goa Self Drive",
                "email": "savio@goaselfdrive.in",
                "phone": "+91 9876543210",
                "businessAddress": "18th June Road, Panjim"
            }
        }


class GstUpdate(BaseModel):
    isGstEnabled: bool
    gstType: str = "Regular"
    gstNumber: Optional[str] = None


class LocationsUpdate(BaseModel):
    locations: List[str] = Field(..., min_length=1)


class OwnerResponse(BaseModel):
    id: str
    fullName: str
    businessName: str
    email: Optional[str] = None
    phone: Optional[str] = None
    businessAddress: str
    baseLocation: str
    serviceLocations: List[str]
    isGstEnabled: bool
    gstType: Optional[str] = None
    gstNumber: Optional[str] = None
    onboardingStep: int
    onboardingCompletedAt: Optional[datetime] = None
