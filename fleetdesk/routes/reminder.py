from datetime import date
from typing import List, Optional
from uuid import UUID, uuid4

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from fleetdesk.config import get_settings
from fleetdesk.db import fleetQueries
from fleetdesk.db.database import getDb
from fleetdesk.db.reminderUtils import (
    complete_reminder,
    days_remaining,
    filter_reminders,
    reminder_status,
    snooze_reminder,
    summarize
)
from fleetdesk.errors import ValidationError
from fleetdesk.models.reminder import Reminder
from fleetdesk.models.vehicle import Vehicle
from fleetdesk.routes.owner import getOwnerOr404
from fleetdesk.schemas.reminder import (
    ReminderCategory,
    ReminderCreate,
    ReminderPriority,
    ReminderResponse,
    ReminderStatus,
    ReminderSummaryResponse,
    SnoozeRequest
)

router = APIRouter(prefix="/reminder", tags=["Reminder"])


def toReminderResponse(reminder: Reminder, vehicle: Optional[Vehicle], today: date) -> ReminderResponse:
    dueSoonDays = get_settings().DUE_SOON_DAYS
    return ReminderResponse(
        id=str(reminder.id),
        vehicleId=str(reminder.vehicle_id),
        vehicle=vehicle.registration_no if vehicle else None,
        model=vehicle.model_name if vehicle else None,
        type=reminder.type,
        category=reminder.category,
        priority=reminder.priority,
        dueDate=reminder.due_date,
        status=reminder_status(reminder, today, dueSoonDays),
        daysRemaining=days_remaining(reminder, today),
        assignee=reminder.assignee,
        notes=reminder.notes,
        notificationMethods=reminder.notification_methods or []
    )


def getReminderOr404(db: Session, ownerId: UUID, reminderId: UUID) -> Reminder:
    reminder = db.query(Reminder).filter(Reminder.id == reminderId, Reminder.owner_id == ownerId).first()
    if not reminder:
        raise HTTPException(status_code=404, detail="Reminder not found")
    return reminder


def getVehicle(db: Session, vehicleId) -> Optional[Vehicle]:
    return db.query(Vehicle).filter(Vehicle.id == vehicleId).first()


@router.post("/{ownerId}", response_model=ReminderResponse)
def addReminder(ownerId: UUID, request: ReminderCreate, db: Session = Depends(getDb)):
    getOwnerOr404(db, ownerId)

    try:
        vehicleId = fleetQueries.as_uuid(request.vehicleId)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid vehicle id")
    vehicle = getVehicle(db, vehicleId)
    if not vehicle or vehicle.owner_id != ownerId:
        raise HTTPException(status_code=400, detail="Vehicle not found")

    reminder = Reminder(
        id=uuid4(),
        owner_id=ownerId,
        vehicle_id=vehicleId,
        type=request.type.strip(),
        category=request.category.value,
        priority=request.priority.value,
        due_date=request.dueDate,
        assignee=request.assignee,
        notes=request.notes,
        notification_methods=list(request.notificationMethods)
    )
    db.add(reminder)
    db.commit()
    db.refresh(reminder)
    return toReminderResponse(reminder, vehicle, date.today())


@router.get("/{ownerId}", response_model=List[ReminderResponse])
def listReminders(
    ownerId: UUID,
    search: Optional[str] = None,
    category: Optional[ReminderCategory] = None,
    status: Optional[ReminderStatus] = None,
    priority: Optional[ReminderPriority] = None,
    db: Session = Depends(getDb)
):
    today = date.today()
    reminders = (
        db.query(Reminder)
        .filter(Reminder.owner_id == ownerId)
        .order_by(Reminder.due_date)
        .all()
    )
    vehicles = {str(v.id): v for v in fleetQueries.query_vehicles(db, ownerId)}

    reminders = filter_reminders(
        reminders,
        today,
        vehicles=vehicles,
        search=search,
        category=category.value if category else None,
        status=status.value if status else None,
        priority=priority.value if priority else None,
        due_soon_days=get_settings().DUE_SOON_DAYS
    )
    return [toReminderResponse(r, vehicles.get(str(r.vehicle_id)), today) for r in reminders]


@router.get("/{ownerId}/summary", response_model=ReminderSummaryResponse)
def reminderSummary(ownerId: UUID, db: Session = Depends(getDb)):
    reminders = db.query(Reminder).filter(Reminder.owner_id == ownerId).all()
    counts = summarize(reminders, date.today(), get_settings().DUE_SOON_DAYS)
    return ReminderSummaryResponse(
        overdue=counts["Overdue"],
        dueSoon=counts["Due Soon"],
        upcoming=counts["Upcoming"],
        completed=counts["Completed"]
    )


@router.put("/{ownerId}/{reminderId}/complete", response_model=ReminderResponse)
def completeReminder(ownerId: UUID, reminderId: UUID, db: Session = Depends(getDb)):
    reminder = complete_reminder(db, getReminderOr404(db, ownerId, reminderId))
    return toReminderResponse(reminder, getVehicle(db, reminder.vehicle_id), date.today())


@router.put("/{ownerId}/{reminderId}/snooze", response_model=ReminderResponse)
def snoozeReminder(ownerId: UUID, reminderId: UUID, request: SnoozeRequest, db: Session = Depends(getDb)):
    reminder = getReminderOr404(db, ownerId, reminderId)
    try:
        reminder = snooze_reminder(db, reminder, request.days)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return toReminderResponse(reminder, getVehicle(db, reminder.vehicle_id), date.today())
