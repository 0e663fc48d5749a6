"""
Financial Data Service.

Answers the quarterly income and deductible-expense lookups of the period
engine from the ledger table.
"""
from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.orm import Session

from selfemploy.core.exceptions import InvalidLedgerEntryError
from selfemploy.models.ledger_models import EntryKind, LedgerEntry
from selfemploy.services.tax_periods import Quarter, TaxYear, quarter_window

logger = logging.getLogger(__name__)


class FinancialDataService:
    """Ledger-backed implementation of the FinancialDataSource protocol."""

    def __init__(self, db: Session):
        self.db = db

    def record_entry(
        self,
        business_id: str,
        entry_date: date,
        kind: EntryKind,
        amount: Decimal,
        allowable: bool = True,
        description: str | None = None,
    ) -> LedgerEntry:
        """Add an income or expense line.

        Raises:
            InvalidLedgerEntryError: If amount is not positive or business_id is blank
        """
        if not business_id or not business_id.strip():
            raise InvalidLedgerEntryError("business_id is required")
        if amount is None or Decimal(str(amount)) <= 0:
            raise InvalidLedgerEntryError("amount must be greater than zero")

        entry = LedgerEntry(
            business_id=business_id,
            entry_date=entry_date,
            kind=EntryKind(kind).value,
            amount=Decimal(str(amount)),
            allowable=allowable if EntryKind(kind) is EntryKind.EXPENSE else True,
            description=description,
        )
        self.db.add(entry)
        self.db.commit()
        self.db.refresh(entry)
        logger.info(
            "Recorded %s of %s for business %s on %s", entry.kind, entry.amount, business_id, entry_date
        )
        return entry

    def get_total_by_quarter(self, business_id: str, tax_year: TaxYear, quarter: Quarter) -> Decimal:
        """Total income for the quarter."""
        window = quarter_window(tax_year, quarter)
        return self._sum(business_id, EntryKind.INCOME, window.start_date, window.end_date)

    def get_deductible_total_by_quarter(self, business_id: str, tax_year: TaxYear, quarter: Quarter) -> Decimal:
        """Total allowable expenses for the quarter."""
        window = quarter_window(tax_year, quarter)
        return self._sum(
            business_id, EntryKind.EXPENSE, window.start_date, window.end_date, allowable_only=True
        )

    def _sum(
        self,
        business_id: str,
        kind: EntryKind,
        start_date: date,
        end_date: date,
        allowable_only: bool = False,
    ) -> Decimal:
        q = self.db.query(func.sum(LedgerEntry.amount)).filter(
            LedgerEntry.business_id == business_id,
            LedgerEntry.kind == kind.value,
            LedgerEntry.entry_date >= start_date,
            LedgerEntry.entry_date <= end_date,
        )
        if allowable_only:
            q = q.filter(LedgerEntry.allowable.is_(True))
        result = q.scalar()
        return Decimal(str(result)) if result is not None else Decimal("0")
