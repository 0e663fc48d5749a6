from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String, UniqueConstraint

from selfemploy.db.base_class import Base


class SubmissionRecord(Base):
    """A period that has been submitted to HMRC.

    ``period_key`` is Q1-Q4 for quarterly updates or ANNUAL for the final
    declaration. One record per business, tax year and period.
    """
    __tablename__ = "submission_records"
    __table_args__ = (
        UniqueConstraint("business_id", "tax_year_start", "period_key", name="uq_submission_period"),
    )

    id = Column(Integer, primary_key=True, index=True)
    business_id = Column(String(64), nullable=False, index=True)
    tax_year_start = Column(Integer, nullable=False)
    period_key = Column(String(10), nullable=False)
    hmrc_reference = Column(String(100), nullable=True)
    submitted_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
