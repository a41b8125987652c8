from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import NamedTuple, Optional

UPI_SENTINEL = "XUPI"
UNCATEGORIZED = "Uncategorized"


class TransactionType(str, Enum):
    DEBIT = "debit"
    CREDIT = "credit"


@dataclass(frozen=True)
class Transaction:
    id: str
    timestamp: datetime
    amount: Optional[float]   # None for unparsed entries
    type: TransactionType
    merchant: str = ""
    category: str = UNCATEGORIZED
    account_last_digits: Optional[str] = None  # card digits or UPI_SENTINEL
    balance: Optional[float] = None

    @property
    def value(self) -> float:
        return self.amount or 0.0

    @property
    def is_debit(self) -> bool:
        return self.type == TransactionType.DEBIT

    @property
    def is_credit(self) -> bool:
        return self.type == TransactionType.CREDIT


@dataclass(frozen=True)
class Budget:
    id: str
    category: str
    amount: float
    created_at: datetime
    updated_at: datetime
    rollover_enabled: bool = False
    rolled_over_amount: float = 0.0

    @property
    def total_budget(self) -> float:
        if self.rollover_enabled:
            return self.amount + self.rolled_over_amount
        return self.amount


@dataclass(frozen=True)
class Category:
    name: str
    icon: Optional[str] = None
    color: Optional[str] = None
    is_default: bool = False
    is_active: bool = True


class MonthlyPoint(NamedTuple):
    year: int
    month: int
    spending: float
    income: float

    @property
    def key(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class BudgetStatus:
    category: str
    total: float
    spent: float
    remaining: float
    percentage: float  # clamped to [0, 100]
    ratio: float       # unclamped
    level: str         # "ok", "warning" or "over"
