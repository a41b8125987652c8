from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from finsight.domain import UNCATEGORIZED, Budget, Category, Transaction, TransactionType


class TransactionRecord(BaseModel):
    id: str
    timestamp: datetime
    amount: Optional[float] = Field(default=None, ge=0)
    type: TransactionType
    merchant: str = ""
    category: str = UNCATEGORIZED
    account_last_digits: Optional[str] = None
    balance: Optional[float] = None

    model_config = ConfigDict(from_attributes=True, extra="ignore", allow_inf_nan=False)

    def to_domain(self) -> Transaction:
        return Transaction(**self.model_dump())


class BudgetRecord(BaseModel):
    id: str
    category: str
    amount: float = Field(..., ge=0)
    created_at: datetime
    updated_at: datetime
    rollover_enabled: bool = False
    rolled_over_amount: float = Field(default=0.0, ge=0)

    model_config = ConfigDict(from_attributes=True, extra="ignore", allow_inf_nan=False)

    def to_domain(self) -> Budget:
        return Budget(**self.model_dump())


class CategoryRecord(BaseModel):
    name: str
    icon: Optional[str] = None
    color: Optional[str] = None
    is_default: bool = False
    is_active: bool = True

    model_config = ConfigDict(from_attributes=True, extra="ignore", allow_inf_nan=False)

    def to_domain(self) -> Category:
        return Category(**self.model_dump())


class Snapshot(BaseModel):
    categories: list[CategoryRecord] = []
    transactions: list[TransactionRecord] = []
    budgets: list[BudgetRecord] = []

    @model_validator(mode="after")
    def one_budget_per_category(self) -> "Snapshot":
        seen = set()
        for b in self.budgets:
            if b.category in seen:
                raise ValueError(f"duplicate budget for category {b.category!r}")
            seen.add(b.category)
        return self

    def to_domain(self) -> tuple[tuple[Category, ...], tuple[Transaction, ...], tuple[Budget, ...]]:
        return (
            tuple(c.to_domain() for c in self.categories),
            tuple(t.to_domain() for t in self.transactions),
            tuple(b.to_domain() for b in self.budgets),
        )
