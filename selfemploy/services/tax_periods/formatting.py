"""Display strings for periods, statuses and deadlines."""
from __future__ import annotations

from datetime import date
from decimal import Decimal
from types import MappingProxyType
from typing import Optional, Union

from selfemploy.services.tax_periods.engine import Period, PeriodStatus, classify_quarter
from selfemploy.services.tax_periods.tax_year import Quarter

STATUS_DESCRIPTIONS = MappingProxyType({
    PeriodStatus.DRAFT: "Review your income and expenses before submitting to HMRC.",
    PeriodStatus.OVERDUE: "This quarter's deadline has passed. Please submit as soon as possible.",
    PeriodStatus.SUBMITTED: "This quarter has been successfully submitted to HMRC.",
    PeriodStatus.FUTURE: "This quarter has not yet started. No action needed yet.",
})

ACTION_BUTTON_TEXT = MappingProxyType({
    PeriodStatus.DRAFT: "Start Review",
    PeriodStatus.OVERDUE: "Submit Now",
})


def formatted_deadline_label(target: Union[Period, Quarter]) -> str:
    """Fixed deadline label, e.g. ``Current: Q1 (Apr-Jun) - Due by 7 Aug``.

    Quarterly labels use the year-independent MTD day/month; the annual label
    carries the full filing date because it moves with the tax year.
    """
    if isinstance(target, Period):
        if target.quarter is None:
            return (
                f"Annual: {target.tax_year.label} - "
                f"Due by {_day_month_year(target.deadline)}"
            )
        target = target.quarter
    return f"Current: {target.value} ({target.months}) - Due by {target.deadline_text}"


def current_quarter_label(today: date) -> str:
    return formatted_deadline_label(classify_quarter(today))


def deadline_countdown_text(deadline: Optional[date], today: date) -> str:
    if deadline is None:
        return ""
    days_until = (deadline - today).days
    if days_until == 0:
        return "Due today"
    if days_until == 1:
        return "1 day remaining"
    if days_until > 1:
        return f"{days_until} days remaining"
    if days_until == -1:
        return "1 day overdue"
    return f"{abs(days_until)} days overdue"


def status_description(status: PeriodStatus) -> str:
    return STATUS_DESCRIPTIONS[status]


def action_button_text(status: PeriodStatus) -> Optional[str]:
    """Label of the call-to-action for a status, or None when there is none."""
    return ACTION_BUTTON_TEXT.get(status)


def should_show_action(status: PeriodStatus) -> bool:
    return status in ACTION_BUTTON_TEXT


def format_currency(amount: Optional[Decimal]) -> str:
    if amount is None:
        return "--"
    return f"£{Decimal(amount):,.2f}"


def _day_month_year(day: date) -> str:
    return f"{day.day} {day.strftime('%b')} {day.year}"
