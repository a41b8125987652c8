from typing import Mapping, Sequence

from finsight.domain import MonthlyPoint


def savings(income: float, spending: float) -> float:
    return income - spending


def savings_rate(income: float, spending: float) -> float:
    if income <= 0:
        return 0.0
    return savings(income, spending) / income * 100


def month_over_month_change(series: Sequence[MonthlyPoint]) -> float:
    """Percent change in spending of the newest month against the one before it."""
    if len(series) < 2:
        return 0.0
    previous, current = series[-2].spending, series[-1].spending
    if previous <= 0:
        return 0.0
    return (current - previous) / previous * 100


def average_monthly_spending(series: Sequence[MonthlyPoint]) -> float:
    if not series:
        return 0.0
    return sum(p.spending for p in series) / len(series)


def share_of_total(totals: Mapping[str, float]) -> dict[str, float]:
    total = sum(totals.values())
    if total == 0:
        return {k: 0.0 for k in totals}
    return {k: v / total * 100 for k, v in totals.items()}
