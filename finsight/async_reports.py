import asyncio
from typing import Any, Dict, Iterable, List, Sequence

from finsight import aggregator
from finsight.budgets import budget_status
from finsight.domain import Budget, Transaction
from finsight.filters import MonthLike, as_year_month


async def spending_by_months(
    trans: Iterable[Transaction], months: Sequence[MonthLike]
) -> Dict[str, Dict[str, float]]:
    """Spending and income per month, one task per month.

    Keys are ``YYYY-MM`` strings in the order the months were given.
    """
    snapshot = tuple(trans)

    async def month_totals(month: MonthLike) -> tuple[str, Dict[str, float]]:
        year, m = as_year_month(month)
        await asyncio.sleep(0)  # yield between months
        return f"{year:04d}-{m:02d}", {
            "spending": aggregator.monthly_total_spending(snapshot, year, m),
            "income": aggregator.monthly_income(snapshot, year, m),
        }

    results = await asyncio.gather(*(month_totals(m) for m in months))
    return dict(results)


async def dashboard_snapshot(
    trans: Iterable[Transaction],
    budgets: Iterable[Budget],
    month: MonthLike,
    *,
    top_merchants: int = 10,
    series_months: int = 6,
    warning_threshold: float = 90.0,
) -> Dict[str, Any]:
    """Compute the figures a dashboard needs for one month concurrently."""
    snapshot = tuple(trans)
    budget_snapshot = tuple(budgets)
    year, m = as_year_month(month)

    async def run(fn, *args):
        await asyncio.sleep(0)
        return fn(*args)

    categories, merchants, methods, series = await asyncio.gather(
        run(aggregator.category_spending, snapshot, year, m),
        run(aggregator.merchant_totals, snapshot, top_merchants),
        run(aggregator.payment_method_totals, snapshot),
        run(aggregator.monthly_series, snapshot, series_months, (year, m)),
    )
    statuses: List = budget_status(budget_snapshot, categories, warning_threshold)

    return {
        "month": f"{year:04d}-{m:02d}",
        "category_spending": categories,
        "merchant_totals": merchants,
        "payment_method_totals": methods,
        "series": series,
        "budget_status": statuses,
    }
