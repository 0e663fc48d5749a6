"""Metrics facade.

Service code should ONLY call the semantic helpers here so the backend can
change freely.

Metrics:
- period_status_total              Periods resolved, by status
- period_lookup_failures_total     Failed external lookups, by lookup
- deadline_notifications_total     Deadline notifications triggered, by priority
- submissions_recorded_total       Submission records created, by period key
"""

from __future__ import annotations

import logging

from prometheus_client import Counter

logger = logging.getLogger("metrics")

_PERIOD_STATUS = Counter("period_status_total", "Filing periods resolved", ["status"])
_PERIOD_LOOKUP_FAILURES = Counter(
    "period_lookup_failures_total", "External lookups that failed while building periods", ["lookup"]
)
_DEADLINE_NOTIFICATIONS = Counter(
    "deadline_notifications_total", "Deadline notifications triggered", ["priority"]
)
_SUBMISSIONS_RECORDED = Counter("submissions_recorded_total", "Submission records created", ["period"])


def period_status_resolved(status: str) -> None:
    _PERIOD_STATUS.labels(status=status).inc()


def period_lookup_failed(lookup: str) -> None:
    _PERIOD_LOOKUP_FAILURES.labels(lookup=lookup).inc()
    logger.debug("metric period_lookup_failures_total{lookup=%s} += 1", lookup)


def deadline_notification_triggered(priority: str) -> None:
    _DEADLINE_NOTIFICATIONS.labels(priority=priority).inc()


def submission_recorded(period_key: str) -> None:
    _SUBMISSIONS_RECORDED.labels(period=period_key).inc()
