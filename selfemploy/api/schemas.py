"""
Pydantic schemas for the tax-period API.
"""
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from selfemploy.models.ledger_models import EntryKind


class TaxYearOut(BaseModel):
    """Tax year with its statutory dates."""

    start_year: int
    label: str
    hmrc_format: str
    start_date: date
    end_date: date
    online_filing_deadline: date
    paper_filing_deadline: date
    payment_deadline: date
    second_payment_on_account_deadline: date
    days_remaining: int
    progress_percent: int


class PeriodTotalsOut(BaseModel):
    income: float
    expenses: float
    net: float
    income_display: str
    expenses_display: str
    net_display: str


class PeriodOut(BaseModel):
    """One filing period as rendered by clients."""

    key: str
    kind: str
    quarter: str | None
    start_date: date
    end_date: date
    deadline: date
    status: str
    status_text: str
    description: str
    action: str | None
    show_action: bool
    is_current: bool
    deadline_label: str
    countdown: str
    totals: PeriodTotalsOut | None = None


class PeriodListOut(BaseModel):
    tax_year: TaxYearOut
    business_id: str
    today: date
    periods: list[PeriodOut]


class DeadlineOut(BaseModel):
    label: str
    date: date
    days_remaining: int
    countdown: str


class CurrentQuarterOut(BaseModel):
    quarter: str
    months: str
    label: str


class LedgerEntryIn(BaseModel):
    """Income or expense line."""

    business_id: str = Field(..., min_length=1, max_length=64)
    entry_date: date
    kind: EntryKind
    amount: Decimal = Field(..., gt=0, description="Amount in GBP")
    allowable: bool = Field(True, description="Expense counts towards the deductible total")
    description: str | None = Field(None, max_length=255)


class LedgerEntryOut(BaseModel):
    id: int
    business_id: str
    entry_date: date
    kind: str
    amount: float
    allowable: bool
    description: str | None

    model_config = {"from_attributes": True}


class SubmissionIn(BaseModel):
    business_id: str = Field(..., min_length=1, max_length=64)
    start_year: int = Field(..., description="First calendar year of the tax year, e.g. 2024 for 2024/25")
    period_key: str = Field(..., description="Q1, Q2, Q3, Q4 or ANNUAL")
    hmrc_reference: str | None = Field(None, max_length=100)


class SubmissionOut(BaseModel):
    id: int
    business_id: str
    tax_year_start: int
    period_key: str
    hmrc_reference: str | None
    submitted_at: datetime

    model_config = {"from_attributes": True}


class NotificationOut(BaseModel):
    id: int
    deadline_label: str
    deadline_date: date
    trigger_days: int
    priority: str
    title: str
    message: str
    is_read: bool
    snoozed_until: datetime | None
    created_at: datetime | None

    model_config = {"from_attributes": True}


class NotificationListOut(BaseModel):
    unread_count: int
    items: list[NotificationOut]


class NotificationCheckIn(BaseModel):
    start_year: int | None = Field(None, description="Defaults to the tax year containing today")
    today: date | None = None


class SnoozeIn(BaseModel):
    hours: int = Field(..., ge=1, le=24 * 30)
