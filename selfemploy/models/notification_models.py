"""Deadline notification history."""
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import Boolean, Column, Date, DateTime, Integer, String

from selfemploy.db.base_class import Base


class NotificationPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class DeadlineNotification(Base):
    """
    Notification raised for an approaching deadline.

    ``dedup_key`` combines deadline label, deadline date, trigger days and the
    day the notification was raised, so each reminder fires at most once a day.
    """
    __tablename__ = "deadline_notifications"

    id = Column(Integer, primary_key=True, index=True)
    dedup_key = Column(String(200), nullable=False, unique=True)
    deadline_label = Column(String(100), nullable=False)
    deadline_date = Column(Date, nullable=False)
    trigger_days = Column(Integer, nullable=False)
    priority = Column(String(10), nullable=False, default=NotificationPriority.LOW.value)
    title = Column(String(200), nullable=False)
    message = Column(String(500), nullable=False)
    is_read = Column(Boolean, default=False, nullable=False)
    snoozed_until = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True)

    def is_snoozed(self, now: datetime) -> bool:
        if self.snoozed_until is None:
            return False
        until = self.snoozed_until
        # SQLite hands back naive datetimes
        if until.tzinfo is None:
            until = until.replace(tzinfo=timezone.utc)
        return until > now
