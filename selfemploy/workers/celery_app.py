from __future__ import annotations

from datetime import timedelta

from celery import Celery

from selfemploy.core.config import settings


def _create_celery() -> Celery:
    celery = Celery(
        "selfemploy",
        broker=settings.REDIS_URL,
        backend=settings.REDIS_URL,
        include=["selfemploy.workers.tasks"],
    )
    celery.conf.update(
        task_default_queue="default",
        task_serializer="json",
        result_serializer="json",
        accept_content=["json"],
        timezone="Europe/London",
        enable_utc=True,
        task_always_eager=settings.ENV.lower() in {"test"},
    )
    # Beat schedule (only active outside test env)
    if settings.ENV.lower() not in {"test"}:
        celery.conf.beat_schedule = {
            "check-tax-deadlines": {
                "task": "deadlines.check_all",
                "schedule": timedelta(minutes=settings.NOTIFICATION_CHECK_INTERVAL_MINUTES),
            }
        }
    return celery


celery_app = _create_celery()
