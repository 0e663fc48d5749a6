"""Statutory deadlines of a tax year."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from selfemploy.services.tax_periods.tax_year import Quarter, TaxYear


@dataclass(frozen=True)
class Deadline:
    label: str
    date: date

    def days_remaining(self, today: date) -> int:
        """Days until the deadline; negative once it has passed."""
        return (self.date - today).days


def deadlines_for_tax_year(tax_year: TaxYear) -> list[Deadline]:
    """Filing, payment and MTD quarterly deadlines, in that order."""
    deadlines = [
        Deadline("Online Filing Deadline", tax_year.online_filing_deadline),
        Deadline("Payment Due", tax_year.payment_deadline),
        Deadline("Payment on Account Due", tax_year.second_payment_on_account_deadline),
    ]
    deadlines.extend(
        Deadline(f"MTD {quarter.value} Update Due", quarter.deadline(tax_year))
        for quarter in Quarter
    )
    return deadlines
