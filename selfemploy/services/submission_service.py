"""
Submission Repository.

Records which filing periods have been submitted to HMRC and answers the
period engine's ``is_submitted`` lookup.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from selfemploy import metrics
from selfemploy.core.exceptions import SubmissionAlreadyRecordedError, UnknownPeriodError
from selfemploy.models.submission_models import SubmissionRecord
from selfemploy.services.tax_periods import PERIOD_KEYS, TaxYear

logger = logging.getLogger(__name__)


def normalize_period_key(period_key: str) -> str:
    key = (period_key or "").strip().upper()
    if key not in PERIOD_KEYS:
        raise UnknownPeriodError(period_key)
    return key


class SubmissionRepository:
    """SQLAlchemy implementation of the SubmissionLookup protocol."""

    def __init__(self, db: Session):
        self.db = db

    def is_submitted(self, business_id: str, tax_year: TaxYear, period_key: str) -> bool:
        key = normalize_period_key(period_key)
        record = (
            self.db.query(SubmissionRecord.id)
            .filter(
                SubmissionRecord.business_id == business_id,
                SubmissionRecord.tax_year_start == tax_year.start_year,
                SubmissionRecord.period_key == key,
            )
            .first()
        )
        return record is not None

    def record_submission(
        self,
        business_id: str,
        tax_year: TaxYear,
        period_key: str,
        hmrc_reference: str | None = None,
        submitted_at: datetime | None = None,
    ) -> SubmissionRecord:
        """Store a submission.

        Raises:
            UnknownPeriodError: If period_key is not Q1-Q4 or ANNUAL
            SubmissionAlreadyRecordedError: If the period was already submitted
        """
        key = normalize_period_key(period_key)
        if self.is_submitted(business_id, tax_year, key):
            raise SubmissionAlreadyRecordedError(business_id, tax_year.label, key)

        record = SubmissionRecord(
            business_id=business_id,
            tax_year_start=tax_year.start_year,
            period_key=key,
            hmrc_reference=hmrc_reference,
            submitted_at=submitted_at or datetime.now(timezone.utc),
        )
        self.db.add(record)
        try:
            self.db.commit()
        except IntegrityError as exc:
            # Lost a race with a concurrent insert of the same period
            self.db.rollback()
            raise SubmissionAlreadyRecordedError(business_id, tax_year.label, key) from exc
        self.db.refresh(record)
        metrics.submission_recorded(key)
        logger.info("Recorded submission %s %s for business %s", tax_year.label, key, business_id)
        return record

    def list_for_tax_year(self, business_id: str, tax_year: TaxYear) -> list[SubmissionRecord]:
        order = {key: index for index, key in enumerate(PERIOD_KEYS)}
        records = (
            self.db.query(SubmissionRecord)
            .filter(
                SubmissionRecord.business_id == business_id,
                SubmissionRecord.tax_year_start == tax_year.start_year,
            )
            .all()
        )
        return sorted(records, key=lambda r: order.get(r.period_key, len(order)))
