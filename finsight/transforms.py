import json
import logging
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Mapping, Optional, Union
from uuid import uuid4

from pydantic import ValidationError

from finsight.budgets import rollover_adjusted_budget
from finsight.domain import Budget, Category, Transaction
from finsight.schemas import Snapshot

logger = logging.getLogger(__name__)

DEFAULT_BUDGETS: dict[str, float] = {
    "Food & Dining": 15000.0,
    "Shopping": 10000.0,
    "Transportation": 5000.0,
    "Entertainment": 8000.0,
    "Bills & Utilities": 12000.0,
    "Healthcare": 5000.0,
}


def load_seed(
    path: Union[str, Path],
) -> tuple[tuple[Category, ...], tuple[Transaction, ...], tuple[Budget, ...]]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    try:
        snapshot = Snapshot.model_validate(data)
    except ValidationError:
        logger.exception("Seed file %s failed validation", path)
        raise

    categories, transactions, budgets = snapshot.to_domain()
    logger.info(
        "Loaded %d categories, %d transactions, %d budgets from %s",
        len(categories), len(transactions), len(budgets), path,
    )
    return categories, transactions, budgets


def add_transaction(trans: tuple[Transaction, ...], t: Transaction) -> tuple[Transaction, ...]:
    return trans + (t,)


def new_budget(category: str, amount: float, now: datetime, **kwargs) -> Budget:
    return Budget(
        id=str(uuid4()),
        category=category,
        amount=amount,
        created_at=now,
        updated_at=now,
        **kwargs,
    )


def default_budgets(now: datetime) -> tuple[Budget, ...]:
    return tuple(new_budget(cat, amount, now) for cat, amount in DEFAULT_BUDGETS.items())


def budgets_by_category(budgets: tuple[Budget, ...]) -> dict[str, Budget]:
    return {b.category: b for b in budgets}


def find_budget(budgets: tuple[Budget, ...], category: str) -> Optional[Budget]:
    return next((b for b in budgets if b.category == category), None)


def set_budget(budgets: tuple[Budget, ...], budget: Budget, now: datetime) -> tuple[Budget, ...]:
    """Insert ``budget``, or replace the one already held for its category.

    A replacement keeps the stored id and creation time.
    """
    existing = find_budget(budgets, budget.category)
    if existing is None:
        logger.debug("Adding budget for %s", budget.category)
        return budgets + (budget,)

    updated = replace(budget, id=existing.id, created_at=existing.created_at, updated_at=now)
    return tuple(updated if b.id == existing.id else b for b in budgets)


def update_budget_amount(
    budgets: tuple[Budget, ...], category: str, amount: float, now: datetime
) -> tuple[Budget, ...]:
    existing = find_budget(budgets, category)
    if existing is None:
        return set_budget(budgets, new_budget(category, amount, now), now)
    return set_budget(budgets, replace(existing, amount=amount), now)


def _update_by_id(budgets: tuple[Budget, ...], budget_id: str, **changes) -> tuple[Budget, ...]:
    return tuple(replace(b, **changes) if b.id == budget_id else b for b in budgets)


def toggle_rollover(
    budgets: tuple[Budget, ...], budget_id: str, enabled: bool, now: datetime
) -> tuple[Budget, ...]:
    # stored rolled_over_amount survives so re-enabling restores it
    return _update_by_id(budgets, budget_id, rollover_enabled=enabled, updated_at=now)


def clear_rollover(budgets: tuple[Budget, ...], budget_id: str, now: datetime) -> tuple[Budget, ...]:
    return _update_by_id(budgets, budget_id, rolled_over_amount=0.0, updated_at=now)


def process_monthly_rollover(
    budgets: tuple[Budget, ...], spending: Mapping[str, float], now: datetime
) -> tuple[Budget, ...]:
    """Carry each enabled budget's unused allowance into the next period.

    ``spending`` maps category to what was spent in the closing month.
    Budgets with rollover disabled have any stored carry-over reset.
    """
    result = []
    for b in budgets:
        if not b.rollover_enabled:
            if b.rolled_over_amount != 0:
                b = replace(b, rolled_over_amount=0.0, updated_at=now)
            result.append(b)
            continue

        unused = max(rollover_adjusted_budget(b) - spending.get(b.category, 0.0), 0.0)
        logger.debug("Rolling over %.2f for %s", unused, b.category)
        result.append(replace(b, rolled_over_amount=unused, updated_at=now))
    return tuple(result)


def delete_budget(budgets: tuple[Budget, ...], budget_id: str) -> tuple[Budget, ...]:
    return tuple(b for b in budgets if b.id != budget_id)


def delete_budget_by_category(budgets: tuple[Budget, ...], category: str) -> tuple[Budget, ...]:
    return tuple(b for b in budgets if b.category != category)
