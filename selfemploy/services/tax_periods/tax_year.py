"""UK tax year and MTD quarter calendar.

A UK tax year runs 6 April to 5 April. Making Tax Digital splits it into four
quarters whose update deadlines are fixed day/month pairs (7th of the second
month after the quarter ends), the same in every tax year.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import NamedTuple, Optional

from selfemploy.core.exceptions import InvalidTaxYearError

MIN_START_YEAR = 2000
MAX_START_YEAR = 2100

TAX_YEAR_START = (4, 6)  # 6 April
TAX_YEAR_END = (4, 5)  # 5 April


@dataclass(frozen=True)
class TaxYear:
    """Immutable UK tax year, 6 April to 5 April.

    Use ``TaxYear.of(2024)`` for the 2024/25 year. Direct construction is
    allowed for values coming from an external source; nothing is validated
    until the period engine uses the value.
    """

    start_date: date
    end_date: date

    @classmethod
    def of(cls, start_year: int) -> TaxYear:
        """Tax year starting on 6 April of ``start_year``.

        Raises:
            InvalidTaxYearError: If start_year is outside 2000..2100
        """
        if not MIN_START_YEAR <= start_year <= MAX_START_YEAR:
            raise InvalidTaxYearError(
                f"start year {start_year} must be between {MIN_START_YEAR} and {MAX_START_YEAR}"
            )
        return cls(
            start_date=date(start_year, *TAX_YEAR_START),
            end_date=date(start_year + 1, *TAX_YEAR_END),
        )

    @classmethod
    def for_date(cls, day: date) -> TaxYear:
        """Tax year containing ``day``."""
        if (day.month, day.day) >= TAX_YEAR_START:
            return cls.of(day.year)
        return cls.of(day.year - 1)

    @classmethod
    def current(cls, today: Optional[date] = None) -> TaxYear:
        return cls.for_date(today or date.today())

    @property
    def start_year(self) -> int:
        return self.start_date.year

    @property
    def label(self) -> str:
        """Display label, e.g. ``2024/25``."""
        return f"{self.start_date.year}/{self.end_date.year % 100:02d}"

    @property
    def hmrc_format(self) -> str:
        """Tax year as the HMRC APIs expect it, e.g. ``2024-25``."""
        return f"{self.start_date.year}-{self.end_date.year % 100:02d}"

    @property
    def online_filing_deadline(self) -> date:
        return date(self.end_date.year + 1, 1, 31)

    @property
    def paper_filing_deadline(self) -> date:
        return date(self.end_date.year, 10, 31)

    @property
    def payment_deadline(self) -> date:
        """Balancing payment and first payment on account."""
        return date(self.end_date.year + 1, 1, 31)

    @property
    def second_payment_on_account_deadline(self) -> date:
        return date(self.end_date.year + 1, 7, 31)

    def contains(self, day: Optional[date]) -> bool:
        if day is None:
            return False
        return self.start_date <= day <= self.end_date

    def previous(self) -> TaxYear:
        return TaxYear.of(self.start_year - 1)

    def next(self) -> TaxYear:
        return TaxYear.of(self.start_year + 1)

    def days_remaining(self, today: date) -> int:
        """Days left until the tax year ends (0 once it has ended)."""
        if today < self.start_date:
            return (self.end_date - self.start_date).days
        return max((self.end_date - today).days, 0)

    def progress_percent(self, today: date) -> int:
        """Share of the tax year elapsed, 0-100."""
        total = (self.end_date - self.start_date).days
        if total <= 0 or today <= self.start_date:
            return 0
        if today >= self.end_date:
            return 100
        return int((today - self.start_date).days * 100 / total)

    def __str__(self) -> str:
        return self.label


class _QuarterCalendar(NamedTuple):
    # (years after the tax year's start year, month, day)
    start: tuple[int, int, int]
    end: tuple[int, int, int]
    deadline: tuple[int, int, int]
    months: str
    deadline_text: str


class Quarter(str, Enum):
    """MTD quarterly update period."""

    Q1 = "Q1"
    Q2 = "Q2"
    Q3 = "Q3"
    Q4 = "Q4"

    @property
    def _calendar(self) -> _QuarterCalendar:
        return QUARTER_CALENDAR[self]

    def start_date(self, tax_year: TaxYear) -> date:
        return _resolve(tax_year, self._calendar.start)

    def end_date(self, tax_year: TaxYear) -> date:
        return _resolve(tax_year, self._calendar.end)

    def deadline(self, tax_year: TaxYear) -> date:
        return _resolve(tax_year, self._calendar.deadline)

    @property
    def months(self) -> str:
        """Calendar month span, e.g. ``Apr-Jun``."""
        return self._calendar.months

    @property
    def deadline_text(self) -> str:
        """Year-independent deadline, e.g. ``7 Aug``."""
        return self._calendar.deadline_text


QUARTER_CALENDAR: MappingProxyType[Quarter, _QuarterCalendar] = MappingProxyType({
    Quarter.Q1: _QuarterCalendar((0, 4, 6), (0, 7, 5), (0, 8, 7), "Apr-Jun", "7 Aug"),
    Quarter.Q2: _QuarterCalendar((0, 7, 6), (0, 10, 5), (0, 11, 7), "Jul-Sep", "7 Nov"),
    Quarter.Q3: _QuarterCalendar((0, 10, 6), (1, 1, 5), (1, 2, 7), "Oct-Dec", "7 Feb"),
    Quarter.Q4: _QuarterCalendar((1, 1, 6), (1, 4, 5), (1, 5, 7), "Jan-Mar", "7 May"),
})


def _resolve(tax_year: TaxYear, offset: tuple[int, int, int]) -> date:
    years_after, month, day = offset
    return date(tax_year.start_date.year + years_after, month, day)
