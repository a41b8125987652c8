from typing import Iterable, Mapping

from finsight.domain import Budget, BudgetStatus
from finsight.functional import safe_budget


def rollover_adjusted_budget(b: Budget) -> float:
    # a disabled rollover keeps its stored amount but contributes nothing
    return b.amount + (b.rolled_over_amount if b.rollover_enabled else 0.0)


def remaining_budget(spent: float, total_budget: float) -> float:
    return total_budget - spent


def overspend(spent: float, total_budget: float) -> float:
    return max(spent - total_budget, 0.0)


def _ratio(spent: float, total_budget: float) -> float:
    if total_budget == 0:
        return 0.0
    return spent / total_budget * 100


def _clamp(pct: float) -> float:
    return min(max(pct, 0.0), 100.0)


def spending_ratio(
    spent_by_category: Mapping[str, float], budgets: Iterable[Budget], category: str
) -> float:
    """Unclamped spend as a percentage of the category's total budget.

    Returns 0.0 when the category has no budget or a zero total.
    """
    spent = spent_by_category.get(category, 0.0)
    return (
        safe_budget(budgets, category)
        .map(lambda b: _ratio(spent, rollover_adjusted_budget(b)))
        .get_or_else(0.0)
    )


def spending_percentage(
    spent_by_category: Mapping[str, float], budgets: Iterable[Budget], category: str
) -> float:
    return _clamp(spending_ratio(spent_by_category, budgets, category))


def overall_budget_percentage(total_spending: float, budgets: Iterable[Budget]) -> float:
    total = sum((rollover_adjusted_budget(b) for b in budgets), 0.0)
    return _clamp(_ratio(total_spending, total))


def budget_status(
    budgets: Iterable[Budget],
    spent_by_category: Mapping[str, float],
    warning_threshold: float = 90.0,
) -> list[BudgetStatus]:
    rows = []
    for b in budgets:
        total = rollover_adjusted_budget(b)
        spent = spent_by_category.get(b.category, 0.0)
        ratio = _ratio(spent, total)
        if spent > total:
            level = "over"
        elif ratio >= warning_threshold:
            level = "warning"
        else:
            level = "ok"
        rows.append(BudgetStatus(
            category=b.category,
            total=total,
            spent=spent,
            remaining=remaining_budget(spent, total),
            percentage=_clamp(ratio),
            ratio=ratio,
            level=level,
        ))
    return sorted(rows, key=lambda s: s.percentage, reverse=True)
