"""Filing period derivation for a tax year.

Builds the four MTD quarterly periods plus the annual Self Assessment period,
resolves each one's status from the date and from two external lookups
(financial totals and submission records), and never lets a failing lookup
abort the batch.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional, Protocol, Sequence

from selfemploy import metrics
from selfemploy.core.exceptions import InvalidTaxYearError
from selfemploy.services.tax_periods.tax_year import Quarter, TaxYear

logger = logging.getLogger(__name__)

ANNUAL_PERIOD_KEY = "ANNUAL"
PERIOD_KEYS = tuple(q.value for q in Quarter) + (ANNUAL_PERIOD_KEY,)

# Calendar month -> quarter. Assumes an April-start year; the 6th-of-month
# boundary is not honoured here.
_MONTH_TO_QUARTER = {
    4: Quarter.Q1, 5: Quarter.Q1, 6: Quarter.Q1,
    7: Quarter.Q2, 8: Quarter.Q2, 9: Quarter.Q2,
    10: Quarter.Q3, 11: Quarter.Q3, 12: Quarter.Q3,
    1: Quarter.Q4, 2: Quarter.Q4, 3: Quarter.Q4,
}


class PeriodStatus(str, Enum):
    FUTURE = "future"
    DRAFT = "draft"
    OVERDUE = "overdue"
    SUBMITTED = "submitted"

    @property
    def display_text(self) -> str:
        return self.value.capitalize()


class PeriodKind(str, Enum):
    QUARTERLY = "quarterly"
    ANNUAL = "annual"


class FinancialDataSource(Protocol):
    def get_total_by_quarter(self, business_id: str, tax_year: TaxYear, quarter: Quarter) -> Decimal:
        ...

    def get_deductible_total_by_quarter(self, business_id: str, tax_year: TaxYear, quarter: Quarter) -> Decimal:
        ...


class SubmissionLookup(Protocol):
    def is_submitted(self, business_id: str, tax_year: TaxYear, period_key: str) -> bool:
        ...


@dataclass(frozen=True)
class PeriodWindow:
    """Date boundaries of one filing period."""

    tax_year: TaxYear
    quarter: Optional[Quarter]
    start_date: date
    end_date: date
    deadline: date

    @property
    def kind(self) -> PeriodKind:
        return PeriodKind.QUARTERLY if self.quarter else PeriodKind.ANNUAL

    @property
    def key(self) -> str:
        return self.quarter.value if self.quarter else ANNUAL_PERIOD_KEY

    def is_active(self, today: date) -> bool:
        """Whether this is the period the user is currently working in."""
        if self.quarter is None:
            return self.tax_year.contains(today)
        return classify_quarter(today) == self.quarter


@dataclass(frozen=True)
class PeriodTotals:
    income: Decimal
    expenses: Decimal

    @property
    def net(self) -> Decimal:
        return self.income - self.expenses

    @property
    def has_activity(self) -> bool:
        return self.income > 0 or self.expenses > 0

    def __add__(self, other: PeriodTotals) -> PeriodTotals:
        return PeriodTotals(self.income + other.income, self.expenses + other.expenses)


ZERO_TOTALS = PeriodTotals(Decimal("0"), Decimal("0"))


@dataclass(frozen=True)
class Period:
    """A filing period with its resolved status, as handed to presentation."""

    window: PeriodWindow
    status: PeriodStatus
    totals: Optional[PeriodTotals] = None
    is_current: bool = False

    @property
    def kind(self) -> PeriodKind:
        return self.window.kind

    @property
    def key(self) -> str:
        return self.window.key

    @property
    def tax_year(self) -> TaxYear:
        return self.window.tax_year

    @property
    def quarter(self) -> Optional[Quarter]:
        return self.window.quarter

    @property
    def start_date(self) -> date:
        return self.window.start_date

    @property
    def end_date(self) -> date:
        return self.window.end_date

    @property
    def deadline(self) -> date:
        return self.window.deadline


def validate_tax_year(tax_year: TaxYear) -> None:
    if tax_year.end_date <= tax_year.start_date:
        raise InvalidTaxYearError(
            "end date must be after start date",
            start_date=tax_year.start_date,
            end_date=tax_year.end_date,
        )


def classify_quarter(today: date) -> Quarter:
    """Quarter for a calendar date, by month number only."""
    return _MONTH_TO_QUARTER[today.month]


def quarter_window(tax_year: TaxYear, quarter: Quarter) -> PeriodWindow:
    validate_tax_year(tax_year)
    return PeriodWindow(
        tax_year=tax_year,
        quarter=quarter,
        start_date=quarter.start_date(tax_year),
        end_date=quarter.end_date(tax_year),
        deadline=quarter.deadline(tax_year),
    )


def annual_window(tax_year: TaxYear) -> PeriodWindow:
    validate_tax_year(tax_year)
    return PeriodWindow(
        tax_year=tax_year,
        quarter=None,
        start_date=tax_year.start_date,
        end_date=tax_year.end_date,
        deadline=tax_year.online_filing_deadline,
    )


def period_windows(tax_year: TaxYear) -> list[PeriodWindow]:
    """Q1, Q2, Q3, Q4 then the annual period."""
    return [quarter_window(tax_year, q) for q in Quarter] + [annual_window(tax_year)]


def status_of(
    window: PeriodWindow,
    today: date,
    is_submitted: bool,
    has_activity: bool = False,
) -> PeriodStatus:
    """Resolve a period's status; the first matching rule wins."""
    if today < window.start_date:
        return PeriodStatus.FUTURE
    if is_submitted:
        return PeriodStatus.SUBMITTED
    if today > window.deadline:
        return PeriodStatus.OVERDUE
    if today > window.end_date or has_activity:
        return PeriodStatus.DRAFT
    if window.is_active(today):
        return PeriodStatus.DRAFT
    return PeriodStatus.FUTURE


class TaxPeriodEngine:
    """Builds the filing periods of a tax year for one business.

    The two collaborators are passed in at construction; any object with the
    right methods will do (see FinancialDataSource and SubmissionLookup).
    """

    def __init__(self, financial_data: FinancialDataSource, submissions: SubmissionLookup):
        self.financial_data = financial_data
        self.submissions = submissions

    def build_periods(self, tax_year: TaxYear, today: date, business_id: str) -> list[Period]:
        """Return the five periods of ``tax_year`` in fixed order Q1-Q4, Annual.

        Periods that have not started yet never hit the financial data source.
        A failed lookup only affects its own period: totals are left unset and
        the status falls back to the date-based rules.
        """
        validate_tax_year(tax_year)
        windows = period_windows(tax_year)
        periods: list[Period] = []
        quarterly_totals: list[Optional[PeriodTotals]] = []

        for window in windows[:-1]:
            is_current = window.is_active(today) and tax_year.contains(today)
            if today < window.start_date:
                periods.append(Period(window, PeriodStatus.FUTURE, None, is_current))
                quarterly_totals.append(ZERO_TOTALS)
                continue

            totals = self._fetch_totals(business_id, tax_year, window.quarter)
            submitted = self._is_submitted(business_id, tax_year, window.key)
            status = status_of(window, today, submitted, totals is not None and totals.has_activity)
            quarterly_totals.append(totals)
            if status is PeriodStatus.FUTURE:
                totals = None
            periods.append(Period(window, status, totals, is_current))

        annual = windows[-1]
        annual_totals: Optional[PeriodTotals] = None
        if today >= annual.start_date and all(t is not None for t in quarterly_totals):
            annual_totals = sum(quarterly_totals, ZERO_TOTALS)  # type: ignore[arg-type]
        if today < annual.start_date:
            annual_status = PeriodStatus.FUTURE
        else:
            annual_status = status_of(
                annual,
                today,
                self._is_submitted(business_id, tax_year, annual.key),
                annual_totals is not None and annual_totals.has_activity,
            )
        periods.append(Period(annual, annual_status, annual_totals, annual.is_active(today)))

        for period in periods:
            metrics.period_status_resolved(period.status.value)
        logger.debug(
            "Built periods for business=%s tax_year=%s today=%s: %s",
            business_id,
            tax_year.label,
            today,
            ", ".join(f"{p.key}={p.status.value}" for p in periods),
        )
        return periods

    def _fetch_totals(self, business_id: str, tax_year: TaxYear, quarter: Quarter) -> Optional[PeriodTotals]:
        try:
            income = self.financial_data.get_total_by_quarter(business_id, tax_year, quarter)
            expenses = self.financial_data.get_deductible_total_by_quarter(business_id, tax_year, quarter)
        except Exception as exc:  # noqa: BLE001 - isolated to this period
            logger.warning("Failed to load financial data for %s %s: %s", tax_year.label, quarter.value, exc)
            metrics.period_lookup_failed("financial_data")
            return None
        return PeriodTotals(Decimal(str(income or 0)), Decimal(str(expenses or 0)))

    def _is_submitted(self, business_id: str, tax_year: TaxYear, period_key: str) -> bool:
        try:
            return bool(self.submissions.is_submitted(business_id, tax_year, period_key))
        except Exception as exc:  # noqa: BLE001 - treat as not submitted
            logger.warning("Failed to load submission status for %s %s: %s", tax_year.label, period_key, exc)
            metrics.period_lookup_failed("submission")
            return False


def build_periods(
    tax_year: TaxYear,
    today: date,
    financial_data: FinancialDataSource,
    submissions: SubmissionLookup,
    business_id: str,
) -> Sequence[Period]:
    """Functional form of TaxPeriodEngine.build_periods."""
    return TaxPeriodEngine(financial_data, submissions).build_periods(tax_year, today, business_id)
