"""
Tax Year Routes.

Tax year dates, filing periods with their status, and statutory deadlines.
"""
from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, Query

from selfemploy.api.dependencies import PeriodEngineDep
from selfemploy.api.schemas import (
    CurrentQuarterOut,
    DeadlineOut,
    PeriodListOut,
    PeriodOut,
    PeriodTotalsOut,
    TaxYearOut,
)
from selfemploy.core.config import settings
from selfemploy.services.tax_periods import (
    Period,
    TaxYear,
    action_button_text,
    classify_quarter,
    deadline_countdown_text,
    deadlines_for_tax_year,
    format_currency,
    formatted_deadline_label,
    should_show_action,
    status_description,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def tax_year_out(tax_year: TaxYear, today: date) -> TaxYearOut:
    return TaxYearOut(
        start_year=tax_year.start_year,
        label=tax_year.label,
        hmrc_format=tax_year.hmrc_format,
        start_date=tax_year.start_date,
        end_date=tax_year.end_date,
        online_filing_deadline=tax_year.online_filing_deadline,
        paper_filing_deadline=tax_year.paper_filing_deadline,
        payment_deadline=tax_year.payment_deadline,
        second_payment_on_account_deadline=tax_year.second_payment_on_account_deadline,
        days_remaining=tax_year.days_remaining(today),
        progress_percent=tax_year.progress_percent(today),
    )


def period_out(period: Period, today: date) -> PeriodOut:
    totals = None
    if period.totals is not None:
        totals = PeriodTotalsOut(
            income=float(period.totals.income),
            expenses=float(period.totals.expenses),
            net=float(period.totals.net),
            income_display=format_currency(period.totals.income),
            expenses_display=format_currency(period.totals.expenses),
            net_display=format_currency(period.totals.net),
        )
    return PeriodOut(
        key=period.key,
        kind=period.kind.value,
        quarter=period.quarter.value if period.quarter else None,
        start_date=period.start_date,
        end_date=period.end_date,
        deadline=period.deadline,
        status=period.status.value,
        status_text=period.status.display_text,
        description=status_description(period.status),
        action=action_button_text(period.status),
        show_action=should_show_action(period.status),
        is_current=period.is_current,
        deadline_label=formatted_deadline_label(period),
        countdown=deadline_countdown_text(period.deadline, today),
        totals=totals,
    )


@router.get("/tax-years/current", response_model=TaxYearOut)
async def get_current_tax_year(today: date | None = Query(None, description="Defaults to the server date")):
    today = today or date.today()
    return tax_year_out(TaxYear.current(today), today)


@router.get("/tax-years/{start_year}", response_model=TaxYearOut)
async def get_tax_year(start_year: int, today: date | None = Query(None)):
    today = today or date.today()
    return tax_year_out(TaxYear.of(start_year), today)


@router.get("/tax-years/{start_year}/periods", response_model=PeriodListOut)
def get_periods(
    start_year: int,
    engine: PeriodEngineDep,
    business_id: str | None = Query(None, min_length=1, max_length=64),
    today: date | None = Query(None),
):
    """
    Get the four MTD quarters and the annual period of a tax year.

    Status is recomputed on every call from ``today`` and the stored ledger
    and submission records.
    """
    today = today or date.today()
    business_id = business_id or settings.DEFAULT_BUSINESS_ID
    tax_year = TaxYear.of(start_year)
    periods = engine.build_periods(tax_year, today, business_id)
    return PeriodListOut(
        tax_year=tax_year_out(tax_year, today),
        business_id=business_id,
        today=today,
        periods=[period_out(p, today) for p in periods],
    )


@router.get("/tax-years/{start_year}/deadlines", response_model=list[DeadlineOut])
async def get_deadlines(start_year: int, today: date | None = Query(None)):
    today = today or date.today()
    return [
        DeadlineOut(
            label=d.label,
            date=d.date,
            days_remaining=d.days_remaining(today),
            countdown=deadline_countdown_text(d.date, today),
        )
        for d in deadlines_for_tax_year(TaxYear.of(start_year))
    ]


@router.get("/quarters/current", response_model=CurrentQuarterOut)
async def get_current_quarter(today: date | None = Query(None)):
    quarter = classify_quarter(today or date.today())
    return CurrentQuarterOut(
        quarter=quarter.value,
        months=quarter.months,
        label=formatted_deadline_label(quarter),
    )
