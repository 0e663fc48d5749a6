"""
Deadline Notification Routes.

History, read/snooze state and an on-demand deadline check.
"""
from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter

from selfemploy.api.dependencies import NotificationServiceDep
from selfemploy.api.schemas import NotificationCheckIn, NotificationListOut, NotificationOut, SnoozeIn
from selfemploy.services.tax_periods import TaxYear

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/notifications", response_model=NotificationListOut)
def list_notifications(service: NotificationServiceDep):
    """Notification history, most recent first."""
    return NotificationListOut(unread_count=service.unread_count(), items=service.history())


@router.post("/notifications/check", response_model=list[NotificationOut])
def check_deadlines(payload: NotificationCheckIn, service: NotificationServiceDep):
    """Raise any reminders due today for the tax year's deadlines."""
    today = payload.today or date.today()
    tax_year = TaxYear.of(payload.start_year) if payload.start_year is not None else TaxYear.current(today)
    raised = service.check_all_deadlines(tax_year, today)
    logger.info("Deadline check for %s on %s raised %d notifications", tax_year.label, today, len(raised))
    return raised


@router.post("/notifications/read-all")
def mark_all_read(service: NotificationServiceDep) -> dict[str, int]:
    return {"updated": service.mark_all_as_read()}


@router.post("/notifications/{notification_id}/read", response_model=NotificationOut)
def mark_read(notification_id: int, service: NotificationServiceDep):
    return service.mark_as_read(notification_id)


@router.post("/notifications/{notification_id}/snooze", response_model=NotificationOut)
def snooze(notification_id: int, payload: SnoozeIn, service: NotificationServiceDep):
    return service.snooze(notification_id, payload.hours)


@router.delete("/notifications")
def clear_notifications(service: NotificationServiceDep) -> dict[str, int]:
    return {"deleted": service.clear_history()}
