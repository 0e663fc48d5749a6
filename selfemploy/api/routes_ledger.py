from __future__ import annotations

from fastapi import APIRouter, status

from selfemploy.api.dependencies import FinancialDataDep
from selfemploy.api.schemas import LedgerEntryIn, LedgerEntryOut

router = APIRouter()


@router.post("/ledger/entries", response_model=LedgerEntryOut, status_code=status.HTTP_201_CREATED)
def create_ledger_entry(payload: LedgerEntryIn, financial_data: FinancialDataDep):
    """Record an income or expense line used for quarterly totals."""
    return financial_data.record_entry(
        business_id=payload.business_id,
        entry_date=payload.entry_date,
        kind=payload.kind,
        amount=payload.amount,
        allowable=payload.allowable,
        description=payload.description,
    )
