from datetime import date, datetime
from typing import Callable, Union

from finsight.domain import Transaction

Predicate = Callable[[Transaction], bool]
MonthLike = Union[tuple[int, int], date]


def month_bounds(year: int, month: int) -> tuple[datetime, datetime]:
    """Return [start, next_start) for a calendar month."""
    start = datetime(year, month, 1)
    if month == 12:
        return start, datetime(year + 1, 1, 1)
    return start, datetime(year, month + 1, 1)


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def as_year_month(value: MonthLike) -> tuple[int, int]:
    if isinstance(value, date):
        return value.year, value.month
    year, month = value
    return int(year), int(month)


def _naive(ts: datetime) -> datetime:
    return ts.replace(tzinfo=None) if ts.tzinfo is not None else ts


def is_debit(t: Transaction) -> bool:
    return t.is_debit


def is_credit(t: Transaction) -> bool:
    return t.is_credit


def has_merchant(t: Transaction) -> bool:
    return bool(t.merchant)


def has_payment_method(t: Transaction) -> bool:
    return t.account_last_digits is not None


def in_month(year: int, month: int) -> Predicate:
    start, end = month_bounds(year, month)

    def _filter(t: Transaction) -> bool:
        return start <= _naive(t.timestamp) < end

    return _filter


def by_date_range(start: datetime, end: datetime) -> Predicate:
    # inclusive on both ends
    start, end = _naive(start), _naive(end)

    def _filter(t: Transaction) -> bool:
        return start <= _naive(t.timestamp) <= end

    return _filter


def by_category(category: str) -> Predicate:
    def _filter(t: Transaction) -> bool:
        return t.category == category

    return _filter


def by_payment_method(identifier: str) -> Predicate:
    def _filter(t: Transaction) -> bool:
        return t.account_last_digits == identifier

    return _filter


def all_of(*preds: Predicate) -> Predicate:
    def _filter(t: Transaction) -> bool:
        return all(p(t) for p in preds)

    return _filter
