"""
Deadline Reminder Tasks.

Runs the deadline notification check for the current tax year on the beat
schedule configured in celery_app.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any

from celery import Task

from selfemploy.db.session import session_scope
from selfemploy.services.notification import DeadlineNotificationService
from selfemploy.services.tax_periods import TaxYear
from selfemploy.workers.celery_app import celery_app

logger = logging.getLogger(__name__)


@celery_app.task(
    bind=True,
    name="deadlines.check_all",
    autoretry_for=(Exception,),
    retry_backoff=60,
    retry_jitter=True,
    retry_kwargs={"max_retries": 3},
)
def check_tax_deadlines(self: Task, today: str | None = None, start_year: int | None = None) -> dict[str, Any]:
    """Raise deadline reminders due today.

    Args:
        today: ISO date override, defaults to the worker's date
        start_year: Tax year to check, defaults to the one containing today

    Returns:
        Tax year label and the titles of notifications raised
    """
    check_date = date.fromisoformat(today) if today else date.today()
    tax_year = TaxYear.of(start_year) if start_year else TaxYear.current(check_date)

    with session_scope() as db:
        service = DeadlineNotificationService(db)
        raised = service.check_all_deadlines(tax_year, check_date)
        titles = [n.title for n in raised]

    logger.info(
        "[deadlines.check_all] tax_year=%s date=%s raised=%d", tax_year.label, check_date, len(titles)
    )
    return {"tax_year": tax_year.label, "date": check_date.isoformat(), "raised": titles}
