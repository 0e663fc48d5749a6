"""Tests for TaxYear and the MTD quarter calendar."""
from datetime import date

import pytest

from selfemploy.core.exceptions import InvalidTaxYearError
from selfemploy.services.tax_periods import Quarter, TaxYear


@pytest.mark.parametrize(
    "start_year,expected_start,expected_end",
    [
        (2020, date(2020, 4, 6), date(2021, 4, 5)),
        (2024, date(2024, 4, 6), date(2025, 4, 5)),
        (2025, date(2025, 4, 6), date(2026, 4, 5)),
    ],
)
def test_tax_year_runs_6_april_to_5_april(start_year, expected_start, expected_end):
    tax_year = TaxYear.of(start_year)

    assert tax_year.start_date == expected_start
    assert tax_year.end_date == expected_end
    assert tax_year.start_year == start_year


def test_labels():
    assert TaxYear.of(2024).label == "2024/25"
    assert TaxYear.of(2024).hmrc_format == "2024-25"
    assert str(TaxYear.of(2025)) == "2025/26"


def test_hmrc_format_pads_end_year():
    assert TaxYear.of(2099).hmrc_format == "2099-00"
    assert TaxYear.of(2008).label == "2008/09"


def test_statutory_deadlines():
    tax_year = TaxYear.of(2025)

    assert tax_year.online_filing_deadline == date(2027, 1, 31)
    assert tax_year.paper_filing_deadline == date(2026, 10, 31)
    assert tax_year.payment_deadline == date(2027, 1, 31)
    assert tax_year.second_payment_on_account_deadline == date(2027, 7, 31)


@pytest.mark.parametrize("start_year", [1999, 2101])
def test_rejects_out_of_range_years(start_year):
    with pytest.raises(InvalidTaxYearError) as exc_info:
        TaxYear.of(start_year)
    assert exc_info.value.code == "PER001"
    assert "year" in exc_info.value.message


def test_accepts_range_boundaries():
    assert TaxYear.of(2000).start_year == 2000
    assert TaxYear.of(2100).start_year == 2100


def test_contains():
    tax_year = TaxYear.of(2025)

    assert tax_year.contains(date(2025, 4, 6))
    assert tax_year.contains(date(2026, 1, 1))
    assert tax_year.contains(date(2026, 4, 5))
    assert not tax_year.contains(date(2025, 4, 5))
    assert not tax_year.contains(date(2026, 4, 6))
    assert not tax_year.contains(None)


def test_for_date_switches_on_6_april():
    assert TaxYear.for_date(date(2025, 4, 5)) == TaxYear.of(2024)
    assert TaxYear.for_date(date(2025, 4, 6)) == TaxYear.of(2025)
    assert TaxYear.current(date(2025, 1, 15)) == TaxYear.of(2024)


def test_current_contains_today():
    assert TaxYear.current().contains(date.today())


def test_navigation():
    tax_year = TaxYear.of(2025)

    assert tax_year.previous().label == "2024/25"
    assert tax_year.next().label == "2026/27"


def test_progress_through_the_year():
    tax_year = TaxYear.of(2024)

    assert tax_year.progress_percent(date(2024, 1, 1)) == 0
    assert tax_year.progress_percent(date(2024, 10, 5)) == 50
    assert tax_year.progress_percent(date(2025, 6, 1)) == 100
    assert tax_year.days_remaining(date(2025, 4, 4)) == 1
    assert tax_year.days_remaining(date(2025, 5, 1)) == 0


@pytest.mark.parametrize(
    "quarter,start,end,deadline",
    [
        (Quarter.Q1, date(2024, 4, 6), date(2024, 7, 5), date(2024, 8, 7)),
        (Quarter.Q2, date(2024, 7, 6), date(2024, 10, 5), date(2024, 11, 7)),
        (Quarter.Q3, date(2024, 10, 6), date(2025, 1, 5), date(2025, 2, 7)),
        (Quarter.Q4, date(2025, 1, 6), date(2025, 4, 5), date(2025, 5, 7)),
    ],
)
def test_quarter_calendar(quarter, start, end, deadline):
    tax_year = TaxYear.of(2024)

    assert quarter.start_date(tax_year) == start
    assert quarter.end_date(tax_year) == end
    assert quarter.deadline(tax_year) == deadline


def test_quarters_cover_the_year_without_gaps():
    tax_year = TaxYear.of(2024)
    quarters = list(Quarter)

    assert quarters[0].start_date(tax_year) == tax_year.start_date
    assert quarters[-1].end_date(tax_year) == tax_year.end_date
    for previous, following in zip(quarters, quarters[1:]):
        assert (following.start_date(tax_year) - previous.end_date(tax_year)).days == 1
