from datetime import date, datetime, timedelta, timezone

import pytest
from sqlalchemy import event

from selfemploy.core.exceptions import NotificationNotFoundError
from selfemploy.db.session import SessionLocal
from selfemploy.models.notification_models import DeadlineNotification, NotificationPriority
from selfemploy.services.notification import (
    DeadlineNotificationService,
    NotificationPreferences,
    priority_for,
)
from selfemploy.services.tax_periods import Deadline, TaxYear

Q1_DEADLINE = Deadline("MTD Q1 Update Due", date(2024, 8, 7))


@pytest.fixture
def service(db_session):
    return DeadlineNotificationService(db_session, NotificationPreferences())


@pytest.mark.parametrize(
    "days,expected",
    [
        (0, NotificationPriority.CRITICAL),
        (-3, NotificationPriority.CRITICAL),
        (1, NotificationPriority.HIGH),
        (2, NotificationPriority.MEDIUM),
        (7, NotificationPriority.MEDIUM),
        (8, NotificationPriority.LOW),
        (30, NotificationPriority.LOW),
    ],
)
def test_priority_for(days, expected):
    assert priority_for(days) == expected


@pytest.mark.parametrize(
    "today,expected",
    [
        (date(2024, 7, 8), [30]),
        (date(2024, 7, 31), [7]),
        (date(2024, 8, 6), [1]),
        (date(2024, 8, 7), [0]),
        (date(2024, 8, 2), []),
        (date(2024, 8, 8), []),
    ],
)
def test_check_deadline_matches_trigger_days(service, today, expected):
    assert [p.trigger_days for p in service.check_deadline(Q1_DEADLINE, today)] == expected


def test_check_deadline_disabled(db_session):
    service = DeadlineNotificationService(db_session, NotificationPreferences(enabled=False))

    assert service.check_deadline(Q1_DEADLINE, date(2024, 8, 7)) == []
    assert service.check_all_deadlines(TaxYear.of(2024), date(2024, 7, 31)) == []


def test_check_all_deadlines_raises_once_per_day(service):
    raised = service.check_all_deadlines(TaxYear.of(2024), date(2024, 7, 31))

    assert len(raised) == 1
    notification = raised[0]
    assert notification.deadline_label == "MTD Q1 Update Due"
    assert notification.deadline_date == date(2024, 8, 7)
    assert notification.priority == NotificationPriority.MEDIUM.value
    assert notification.title == "Deadline Approaching: MTD Q1 Update Due"
    assert notification.message == "MTD Q1 Update Due is due in 7 days (7 Aug 2024)."

    assert service.check_all_deadlines(TaxYear.of(2024), date(2024, 7, 31)) == []


def test_deadline_day_notification(service):
    notification = service.trigger_notification(Q1_DEADLINE, 0, date(2024, 8, 7))

    assert notification.priority == NotificationPriority.CRITICAL.value
    assert notification.title == "Deadline Today: MTD Q1 Update Due"
    assert notification.message == "MTD Q1 Update Due is due today (7 Aug 2024)."


def test_filing_and_payment_deadlines_share_a_day(service):
    # Online filing and balancing payment both fall on 31 Jan
    raised = service.check_all_deadlines(TaxYear.of(2024), date(2026, 1, 30))

    assert sorted(n.deadline_label for n in raised) == ["Online Filing Deadline", "Payment Due"]
    assert {n.priority for n in raised} == {NotificationPriority.HIGH.value}


def test_handler_receives_new_notifications(db_session):
    received = []
    service = DeadlineNotificationService(db_session, NotificationPreferences(), handler=received.append)

    service.check_all_deadlines(TaxYear.of(2024), date(2024, 7, 31))

    assert [n.deadline_label for n in received] == ["MTD Q1 Update Due"]


def test_failing_handler_does_not_block(db_session):
    def handler(notification):
        raise RuntimeError("push channel down")

    service = DeadlineNotificationService(db_session, NotificationPreferences(), handler=handler)

    raised = service.check_all_deadlines(TaxYear.of(2024), date(2024, 7, 31))

    assert len(raised) == 1
    assert len(service.history()) == 1


def test_read_and_unread(service):
    first = service.trigger_notification(Q1_DEADLINE, 7, date(2024, 7, 31))
    service.trigger_notification(Q1_DEADLINE, 1, date(2024, 8, 6))

    assert service.unread_count() == 2
    assert service.mark_as_read(first.id).is_read
    assert service.unread_count() == 1
    assert service.mark_all_as_read() == 1
    assert service.unread_count() == 0


def test_snoozed_notifications_are_not_counted(service):
    notification = service.trigger_notification(Q1_DEADLINE, 7, date(2024, 7, 31))
    now = datetime(2024, 7, 31, 9, 0, tzinfo=timezone.utc)

    snoozed = service.snooze(notification.id, hours=4, now=now)

    assert snoozed.snoozed_until == now + timedelta(hours=4)
    assert service.unread_count(now=now + timedelta(hours=1)) == 0
    assert service.unread_count(now=now + timedelta(hours=5)) == 1


def test_history_and_clear(service):
    service.trigger_notification(Q1_DEADLINE, 30, date(2024, 7, 8))
    latest = service.trigger_notification(Q1_DEADLINE, 7, date(2024, 7, 31))

    history = service.history()
    assert len(history) == 2
    assert history[0].id == latest.id

    assert service.clear_history() == 2
    assert service.history() == []


def test_unknown_notification(service):
    with pytest.raises(NotificationNotFoundError) as exc_info:
        service.mark_as_read(999)
    assert exc_info.value.status_code == 404


def test_reminder_raised_concurrently_is_skipped(db_session, service):
    today = date(2024, 7, 31)

    @event.listens_for(db_session, "before_flush", once=True)
    def _other_worker_inserts_first(session, flush_context, instances):
        with SessionLocal() as other:
            other.add(
                DeadlineNotification(
                    dedup_key=f"MTD Q1 Update Due_2024-08-07_7_{today.isoformat()}",
                    deadline_label="MTD Q1 Update Due",
                    deadline_date=date(2024, 8, 7),
                    trigger_days=7,
                    priority=NotificationPriority.MEDIUM.value,
                    title="Deadline Approaching: MTD Q1 Update Due",
                    message="MTD Q1 Update Due is due in 7 days (7 Aug 2024).",
                )
            )
            other.commit()

    assert service.trigger_notification(Q1_DEADLINE, 7, today) is None
    # Session is usable again after the rollback
    assert len(service.history()) == 1
    assert service.check_all_deadlines(TaxYear.of(2024), today) == []


def test_pending_notification_priority(service):
    pending = service.check_deadline(Q1_DEADLINE, date(2024, 8, 6))

    assert [p.priority for p in pending] == [NotificationPriority.HIGH]
