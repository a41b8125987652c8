"""Tabular views of aggregation results for the dashboard."""

from dataclasses import asdict
from typing import Iterable, Mapping, Sequence

import pandas as pd

from finsight.domain import BudgetStatus, MonthlyPoint, Transaction, TransactionType


def series_frame(series: Sequence[MonthlyPoint]) -> pd.DataFrame:
    if not series:
        return pd.DataFrame(columns=["Month", "Spending", "Income", "Savings"])
    return pd.DataFrame({
        "Month": [p.key for p in series],
        "Spending": [p.spending for p in series],
        "Income": [p.income for p in series],
        "Savings": [p.income - p.spending for p in series],
    })


def totals_frame(totals: Mapping[str, float] | Iterable[tuple[str, float]], label: str = "Name") -> pd.DataFrame:
    """One row per key with its amount and share of the column total, largest first."""
    items = list(totals.items()) if isinstance(totals, Mapping) else list(totals)
    if not items:
        return pd.DataFrame(columns=[label, "Amount", "Percent"])

    df = pd.DataFrame(items, columns=[label, "Amount"])
    total = df["Amount"].sum()
    df["Percent"] = (df["Amount"] / total * 100) if total else 0.0
    return df.sort_values("Amount", ascending=False, kind="stable").reset_index(drop=True)


def budget_status_frame(statuses: Sequence[BudgetStatus]) -> pd.DataFrame:
    columns = ["Category", "Budget", "Spent", "Remaining", "Percent Used", "Ratio", "Status"]
    if not statuses:
        return pd.DataFrame(columns=columns)
    df = pd.DataFrame([asdict(s) for s in statuses])
    df = df.rename(columns={
        "category": "Category",
        "total": "Budget",
        "spent": "Spent",
        "remaining": "Remaining",
        "percentage": "Percent Used",
        "ratio": "Ratio",
        "level": "Status",
    })
    return df[columns]


def breakdown_frame(breakdown: Mapping[str, Mapping[str, float]]) -> pd.DataFrame:
    rows = [
        {"Method": method, "Category": category, "Amount": amount}
        for method, per_category in breakdown.items()
        for category, amount in per_category.items()
    ]
    if not rows:
        return pd.DataFrame(columns=["Method", "Category", "Amount"])
    return pd.DataFrame(rows)


def transactions_frame(trans: Iterable[Transaction]) -> pd.DataFrame:
    rows = [
        {
            "date": t.timestamp,
            "amount": t.value,
            "type": TransactionType(t.type).value,
            "merchant": t.merchant,
            "category": t.category,
            "account": t.account_last_digits,
        }
        for t in trans
    ]
    if not rows:
        return pd.DataFrame(columns=["date", "amount", "type", "merchant", "category", "account"])
    df = pd.DataFrame(rows)
    df["date"] = pd.to_datetime(df["date"], errors="coerce")
    return df
