"""
Reminder status helpers.

Status is computed from the due date every time a reminder is read:
- completed                        -> Completed
- due date already passed          -> Overdue
- due within DUE_SOON_DAYS         -> Due Soon
- anything later                   -> Upcoming
"""
import logging
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from fleetdesk.errors import ValidationError
from fleetdesk.models.reminder import Reminder

logger = logging.getLogger(__name__)


def days_remaining(reminder: Reminder, today: date) -> int:
    if reminder.completed_at is not None:
        return 0
    return (reminder.due_date - today).days


def reminder_status(reminder: Reminder, today: date, due_soon_days: int = 7) -> str:
    if reminder.completed_at is not None:
        return "Completed"
    days = days_remaining(reminder, today)
    if days < 0:
        return "Overdue"
    if days <= due_soon_days:
        return "Due Soon"
    return "Upcoming"


def summarize(reminders: Iterable[Reminder], today: date, due_soon_days: int = 7) -> Dict[str, int]:
    counts = {"Overdue": 0, "Due Soon": 0, "Upcoming": 0, "Completed": 0}
    for reminder in reminders:
        counts[reminder_status(reminder, today, due_soon_days)] += 1
    return counts


def filter_reminders(
    reminders: Iterable[Reminder],
    today: date,
    vehicles: Optional[Dict[str, object]] = None,
    search: Optional[str] = None,
    category: Optional[str] = None,
    status: Optional[str] = None,
    priority: Optional[str] = None,
    due_soon_days: int = 7
) -> List[Reminder]:
    """Search matches vehicle registration, vehicle model or reminder type."""
    vehicles = vehicles or {}
    needle = search.strip().lower() if search else ""
    result = []
    for reminder in reminders:
        if category and reminder.category != category:
            continue
        if priority and reminder.priority != priority:
            continue
        if status and reminder_status(reminder, today, due_soon_days) != status:
            continue
        if needle:
            vehicle = vehicles.get(str(reminder.vehicle_id))
            fields = [reminder.type]
            if vehicle:
                fields += [vehicle.registration_no, vehicle.model_name]
            if not any(needle in f.lower() for f in fields if f):
                continue
        result.append(reminder)
    return result


def complete_reminder(db: Session, reminder: Reminder) -> Reminder:
    if reminder.completed_at is None:
        reminder.completed_at = datetime.utcnow()
        db.commit()
        db.refresh(reminder)
        logger.info("Reminder %s completed", reminder.id)
    return reminder


def snooze_reminder(db: Session, reminder: Reminder, days: int) -> Reminder:
    """Push the due date back by `days`."""
    if reminder.completed_at is not None:
        raise ValidationError("Completed reminders cannot be snoozed")
    if days < 1:
        raise ValidationError("Snooze by at least one day")

    reminder.due_date = reminder.due_date + timedelta(days=days)
    db.commit()
    db.refresh(reminder)
    logger.info("Reminder %s snoozed to %s", reminder.id, reminder.due_date)
    return reminder
