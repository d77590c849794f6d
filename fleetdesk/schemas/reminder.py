from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date
from enum import Enum


class ReminderCategory(str, Enum):
    CRITICAL = "Critical"
    MAINTENANCE = "Maintenance"
    FINANCIAL = "Financial"


class ReminderPriority(str, Enum):
    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class ReminderStatus(str, Enum):
    OVERDUE = "Overdue"
    DUE_SOON = "Due Soon"
    UPCOMING = "Upcoming"
    COMPLETED = "Completed"


class ReminderCreate(BaseModel):
    vehicleId: str
    type: str = Field(..., min_length=1)  # e.g. "Insurance Renewal"
    category: ReminderCategory
    priority: ReminderPriority = ReminderPriority.MEDIUM
    dueDate: date
    assignee: Optional[str] = None
    notes: Optional[str] = None
    notificationMethods: List[str] = []

    class Config:
        json_schema_extra = {
            "example": {
                "vehicleId": "0b7d3c1e-2f7e-4b55-9a54-65a1f1a0b9e3",
                "type": "Insurance Renewal",
                "category": "Critical",
                "priority": "High",
                "dueDate": "2024-11-30",
                "assignee": "Fleet Manager",
                "notificationMethods": ["SMS", "Email"]
            }
        }


class SnoozeRequest(BaseModel):
    days: int = Field(..., ge=1, le=365)


class ReminderResponse(BaseModel):
    id: str
    vehicleId: str
    vehicle: Optional[str] = None  # registration number
    model: Optional[str] = None
    type: str
    category: ReminderCategory
    priority: ReminderPriority
    dueDate: date
    status: ReminderStatus
    daysRemaining: int
    assignee: Optional[str] = None
    notes: Optional[str] = None
    notificationMethods: List[str] = []


class ReminderSummaryResponse(BaseModel):
    overdue: int
    dueSoon: int
    upcoming: int
    completed: int
