"""Spending aggregation over transaction snapshots.

Every function here is pure: it reads an iterable of ``Transaction`` records
and returns a freshly built value. Absent amounts count as zero and empty
input yields the identity of the operation (0.0, ``{}`` or ``[]``).
"""

from collections import Counter, defaultdict
from datetime import datetime
from typing import Iterable, Mapping, Optional

from finsight.domain import UPI_SENTINEL, MonthlyPoint, Transaction
from finsight.filters import (
    MonthLike,
    all_of,
    as_year_month,
    by_category,
    by_date_range,
    has_merchant,
    has_payment_method,
    in_month,
    is_credit,
    is_debit,
    shift_month,
)
from finsight.lazy import iter_transactions, top_n

Totals = dict[str, float]


def _sum(trans: Iterable[Transaction]) -> float:
    return sum((t.value for t in trans), 0.0)


def _group(trans: Iterable[Transaction], key) -> Totals:
    totals: Totals = defaultdict(float)
    for t in trans:
        totals[key(t)] += t.value
    return dict(totals)


def transactions_in_month(
    trans: Iterable[Transaction], year: int, month: int
) -> tuple[Transaction, ...]:
    return tuple(iter_transactions(trans, in_month(year, month)))


def monthly_total_spending(trans: Iterable[Transaction], year: int, month: int) -> float:
    return _sum(iter_transactions(trans, all_of(is_debit, in_month(year, month))))


def monthly_income(trans: Iterable[Transaction], year: int, month: int) -> float:
    return _sum(iter_transactions(trans, all_of(is_credit, in_month(year, month))))


def category_spending(trans: Iterable[Transaction], year: int, month: int) -> Totals:
    debits = iter_transactions(trans, all_of(is_debit, in_month(year, month)))
    return _group(debits, lambda t: t.category)


def merchant_totals(trans: Iterable[Transaction], top: int) -> list[tuple[str, float]]:
    totals = _group(iter_transactions(trans, all_of(is_debit, has_merchant)), lambda t: t.merchant)
    return top_n(totals, top)


def payment_method_totals(trans: Iterable[Transaction]) -> Totals:
    return _group(
        iter_transactions(trans, all_of(is_debit, has_payment_method)),
        lambda t: t.account_last_digits,
    )


def payment_method_category_breakdown(trans: Iterable[Transaction]) -> dict[str, Totals]:
    breakdown: dict[str, Totals] = {}
    for t in iter_transactions(trans, all_of(is_debit, has_payment_method)):
        per_category = breakdown.setdefault(t.account_last_digits, {})
        per_category[t.category] = per_category.get(t.category, 0.0) + t.value
    return breakdown


def payment_method_monthly(trans: Iterable[Transaction]) -> dict[str, Totals]:
    monthly: dict[str, Totals] = {}
    for t in iter_transactions(trans, all_of(is_debit, has_payment_method)):
        per_month = monthly.setdefault(t.account_last_digits, {})
        key = f"{t.timestamp.year:04d}-{t.timestamp.month:02d}"
        per_month[key] = per_month.get(key, 0.0) + t.value
    return monthly


def split_upi_and_cards(
    method_totals: Mapping[str, float], sentinel: str = UPI_SENTINEL
) -> tuple[float, Totals]:
    cards = {m: v for m, v in method_totals.items() if m != sentinel}
    return method_totals.get(sentinel, 0.0), cards


def top_payment_methods(
    breakdown: Mapping[str, Mapping[str, float]],
    card_limit: int = 2,
    sentinel: str = UPI_SENTINEL,
) -> list[str]:
    """UPI first when present, then the card methods with the largest spend."""
    methods = [sentinel] if sentinel in breakdown else []
    card_spend = {
        m: sum(per_category.values()) for m, per_category in breakdown.items() if m != sentinel
    }
    methods.extend(m for m, _ in top_n(card_spend, card_limit))
    return methods


def top_categories(totals: Mapping[str, float], n: int) -> list[tuple[str, float]]:
    return top_n(totals, n)


def spending_by_category_in_range(
    trans: Iterable[Transaction], category: str, start: datetime, end: datetime
) -> float:
    pred = all_of(is_debit, by_category(category), by_date_range(start, end))
    return _sum(iter_transactions(trans, pred))


def monthly_series(
    trans: Iterable[Transaction], month_count: int, ending_month: MonthLike
) -> list[MonthlyPoint]:
    snapshot = tuple(trans)
    end_year, end_month = as_year_month(ending_month)
    series = []
    for offset in range(month_count - 1, -1, -1):
        year, month = shift_month(end_year, end_month, -offset)
        series.append(MonthlyPoint(
            year=year,
            month=month,
            spending=monthly_total_spending(snapshot, year, month),
            income=monthly_income(snapshot, year, month),
        ))
    return series


def available_months(trans: Iterable[Transaction]) -> list[tuple[int, int]]:
    months = {(t.timestamp.year, t.timestamp.month) for t in trans}
    return sorted(months, reverse=True)


def unique_accounts(trans: Iterable[Transaction]) -> dict[str, int]:
    return dict(Counter(t.account_last_digits for t in trans if t.account_last_digits is not None))


def latest_balance(trans: Iterable[Transaction]) -> Optional[float]:
    # expects a newest-first snapshot, as the transaction store returns it
    for t in trans:
        if t.balance is not None:
            return t.balance
    return None
