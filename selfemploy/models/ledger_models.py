"""Income and expense ledger backing the quarterly totals."""
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import Boolean, Column, Date, DateTime, Integer, Numeric, String

from selfemploy.db.base_class import Base


class EntryKind(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class LedgerEntry(Base):
    """
    Single income or expense line for a business.

    Expenses carry an ``allowable`` flag; only allowable expenses count
    towards the deductible total of a quarter.
    """
    __tablename__ = "ledger_entries"

    id = Column(Integer, primary_key=True, index=True)
    business_id = Column(String(64), nullable=False, index=True)
    entry_date = Column(Date, nullable=False, index=True)
    kind = Column(String(10), nullable=False)
    amount = Column(Numeric(15, 2), nullable=False)
    allowable = Column(Boolean, default=True, nullable=False)
    description = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
