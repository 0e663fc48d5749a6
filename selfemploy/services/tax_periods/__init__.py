"""Tax Period Module.

Filing-period derivation for UK Self Assessment under Making Tax Digital.

Sub-modules:
- tax_year: TaxYear value and the fixed MTD quarter calendar
- engine: period windows, status resolution and TaxPeriodEngine
- deadlines: statutory filing/payment deadlines of a tax year
- formatting: display strings for periods, statuses and deadlines
"""
from .deadlines import Deadline, deadlines_for_tax_year
from .engine import (
    ANNUAL_PERIOD_KEY,
    PERIOD_KEYS,
    FinancialDataSource,
    Period,
    PeriodKind,
    PeriodStatus,
    PeriodTotals,
    PeriodWindow,
    SubmissionLookup,
    TaxPeriodEngine,
    annual_window,
    build_periods,
    classify_quarter,
    period_windows,
    quarter_window,
    status_of,
    validate_tax_year,
)
from .formatting import (
    action_button_text,
    current_quarter_label,
    deadline_countdown_text,
    format_currency,
    formatted_deadline_label,
    should_show_action,
    status_description,
)
from .tax_year import Quarter, TaxYear

__all__ = [
    # Values
    "TaxYear",
    "Quarter",
    "Deadline",
    "Period",
    "PeriodKind",
    "PeriodStatus",
    "PeriodTotals",
    "PeriodWindow",
    "ANNUAL_PERIOD_KEY",
    "PERIOD_KEYS",
    # Collaborator protocols
    "FinancialDataSource",
    "SubmissionLookup",
    # Engine
    "TaxPeriodEngine",
    "build_periods",
    "classify_quarter",
    "status_of",
    "quarter_window",
    "annual_window",
    "period_windows",
    "validate_tax_year",
    "deadlines_for_tax_year",
    # Formatting
    "formatted_deadline_label",
    "current_quarter_label",
    "deadline_countdown_text",
    "status_description",
    "action_button_text",
    "should_show_action",
    "format_currency",
]
