from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Callable, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from selfemploy import metrics
from selfemploy.core.config import settings
from selfemploy.core.exceptions import NotificationNotFoundError
from selfemploy.models.notification_models import DeadlineNotification, NotificationPriority
from selfemploy.services.tax_periods import Deadline, TaxYear, deadlines_for_tax_year

logger = logging.getLogger(__name__)

NotificationHandler = Callable[[DeadlineNotification], None]


@dataclass
class NotificationPreferences:
    enabled: bool = True
    trigger_days: list[int] = field(default_factory=lambda: [30, 7, 1])

    @classmethod
    def from_settings(cls) -> NotificationPreferences:
        return cls(
            enabled=settings.NOTIFICATIONS_ENABLED,
            trigger_days=list(settings.NOTIFICATION_TRIGGER_DAYS),
        )


def priority_for(days_remaining: int) -> NotificationPriority:
    if days_remaining <= 0:
        return NotificationPriority.CRITICAL
    if days_remaining <= 1:
        return NotificationPriority.HIGH
    if days_remaining <= 7:
        return NotificationPriority.MEDIUM
    return NotificationPriority.LOW


@dataclass(frozen=True)
class PendingNotification:
    """A notification that is due but not yet stored."""

    deadline: Deadline
    trigger_days: int

    @property
    def priority(self) -> NotificationPriority:
        return priority_for(self.trigger_days)


class DeadlineNotificationService:
    """Raises and tracks reminders for approaching tax deadlines.

    Notifications are persisted so the scheduled check and the API share one
    history. ``handler`` is called for every newly raised notification, e.g.
    to push it to a channel; a failing handler never blocks the others.
    """

    def __init__(
        self,
        db: Session,
        preferences: Optional[NotificationPreferences] = None,
        handler: Optional[NotificationHandler] = None,
    ) -> None:
        self.db = db
        self.preferences = preferences or NotificationPreferences.from_settings()
        self.handler = handler

    def check_deadline(self, deadline: Deadline, today: date) -> list[PendingNotification]:
        """Notifications due for ``deadline`` on ``today`` (not stored)."""
        if not self.preferences.enabled:
            return []

        days_remaining = deadline.days_remaining(today)
        if days_remaining == 0:
            return [PendingNotification(deadline, 0)]
        return [
            PendingNotification(deadline, trigger)
            for trigger in self.preferences.trigger_days
            if days_remaining == trigger
        ]

    def trigger_notification(
        self, deadline: Deadline, trigger_days: int, today: date
    ) -> Optional[DeadlineNotification]:
        """Store a notification unless the same one was already raised today."""
        dedup_key = f"{deadline.label}_{deadline.date.isoformat()}_{trigger_days}_{today.isoformat()}"
        existing = (
            self.db.query(DeadlineNotification.id)
            .filter(DeadlineNotification.dedup_key == dedup_key)
            .first()
        )
        if existing:
            logger.debug("Skipping duplicate notification: %s", dedup_key)
            return None

        pending = PendingNotification(deadline, trigger_days)
        priority = pending.priority
        title, message = _compose(pending)
        notification = DeadlineNotification(
            dedup_key=dedup_key,
            deadline_label=deadline.label,
            deadline_date=deadline.date,
            trigger_days=trigger_days,
            priority=priority.value,
            title=title,
            message=message,
        )
        self.db.add(notification)
        try:
            self.db.commit()
        except IntegrityError:
            # Another worker raised the same reminder between the check and the insert
            self.db.rollback()
            logger.debug("Skipping duplicate notification: %s", dedup_key)
            return None
        self.db.refresh(notification)
        metrics.deadline_notification_triggered(priority.value)

        if self.handler is not None:
            try:
                self.handler(notification)
            except Exception as exc:  # noqa: BLE001
                logger.warning("Error in notification handler: %s", exc)

        logger.info("Notification triggered: %s", title, extra={"notification": notification.as_dict()})
        return notification

    def check_all_deadlines(self, tax_year: TaxYear, today: date) -> list[DeadlineNotification]:
        """Raise every notification due today for the tax year's deadlines."""
        if not self.preferences.enabled:
            return []

        raised: list[DeadlineNotification] = []
        for deadline in deadlines_for_tax_year(tax_year):
            for pending in self.check_deadline(deadline, today):
                notification = self.trigger_notification(deadline, pending.trigger_days, today)
                if notification is not None:
                    raised.append(notification)
        return raised

    # === History ===

    def history(self) -> list[DeadlineNotification]:
        """All notifications, most recent first."""
        return (
            self.db.query(DeadlineNotification)
            .order_by(DeadlineNotification.created_at.desc(), DeadlineNotification.id.desc())
            .all()
        )

    def clear_history(self) -> int:
        deleted = self.db.query(DeadlineNotification).delete()
        self.db.commit()
        return deleted

    def mark_as_read(self, notification_id: int) -> DeadlineNotification:
        notification = self._get(notification_id)
        notification.is_read = True
        self.db.commit()
        return notification

    def mark_all_as_read(self) -> int:
        updated = (
            self.db.query(DeadlineNotification)
            .filter(DeadlineNotification.is_read.is_(False))
            .update({DeadlineNotification.is_read: True}, synchronize_session=False)
        )
        self.db.commit()
        return updated

    def snooze(self, notification_id: int, hours: int, now: Optional[datetime] = None) -> DeadlineNotification:
        notification = self._get(notification_id)
        notification.snoozed_until = (now or datetime.now(timezone.utc)) + timedelta(hours=hours)
        self.db.commit()
        return notification

    def unread_count(self, now: Optional[datetime] = None) -> int:
        """Unread notifications that are not currently snoozed."""
        now = now or datetime.now(timezone.utc)
        unread = (
            self.db.query(DeadlineNotification)
            .filter(DeadlineNotification.is_read.is_(False))
            .all()
        )
        return sum(1 for n in unread if not n.is_snoozed(now))

    def _get(self, notification_id: int) -> DeadlineNotification:
        notification = self.db.get(DeadlineNotification, notification_id)
        if notification is None:
            raise NotificationNotFoundError(str(notification_id))
        return notification


def _compose(pending: PendingNotification) -> tuple[str, str]:
    deadline, trigger_days = pending.deadline, pending.trigger_days
    when = f"{deadline.date.day} {deadline.date.strftime('%b %Y')}"
    if trigger_days == 0:
        return (
            f"Deadline Today: {deadline.label}",
            f"{deadline.label} is due today ({when}).",
        )
    days = "1 day" if trigger_days == 1 else f"{trigger_days} days"
    return (
        f"Deadline Approaching: {deadline.label}",
        f"{deadline.label} is due in {days} ({when}).",
    )
