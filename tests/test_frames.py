from datetime import datetime

from finsight.domain import BudgetStatus, MonthlyPoint, Transaction, TransactionType
from finsight.frames import (
    breakdown_frame,
    budget_status_frame,
    series_frame,
    totals_frame,
    transactions_frame,
)


def test_series_frame():
    df = series_frame([MonthlyPoint(2025, 5, 100.0, 300.0), MonthlyPoint(2025, 6, 250.0, 200.0)])
    assert list(df["Month"]) == ["2025-05", "2025-06"]
    assert list(df["Savings"]) == [200.0, -50.0]


def test_series_frame_empty():
    df = series_frame([])
    assert df.empty
    assert list(df.columns) == ["Month", "Spending", "Income", "Savings"]


def test_totals_frame_from_mapping_and_pairs():
    df = totals_frame({"Food": 100.0, "Rent": 300.0}, label="Category")
    assert list(df["Category"]) == ["Rent", "Food"]
    assert list(df["Percent"]) == [75.0, 25.0]

    pairs = totals_frame([("Amazon", 50.0), ("Swiggy", 50.0)], label="Merchant")
    assert list(pairs["Merchant"]) == ["Amazon", "Swiggy"]


def test_totals_frame_zero_total():
    df = totals_frame({"Food": 0.0})
    assert list(df["Percent"]) == [0.0]
    assert totals_frame({}).empty


def test_budget_status_frame():
    status = BudgetStatus("Food", 1000.0, 1200.0, -200.0, 100.0, 120.0, "over")
    df = budget_status_frame([status])
    assert list(df.columns) == ["Category", "Budget", "Spent", "Remaining", "Percent Used", "Ratio", "Status"]
    assert df.iloc[0]["Status"] == "over"
    assert budget_status_frame([]).empty


def test_breakdown_frame():
    df = breakdown_frame({"XUPI": {"Food": 10.0, "Travel": 5.0}, "4821": {"Food": 1.0}})
    assert len(df) == 3
    assert set(df["Method"]) == {"XUPI", "4821"}
    assert breakdown_frame({}).empty


def test_transactions_frame():
    trans = [
        Transaction("t1", datetime(2025, 6, 1), 10.0, TransactionType.DEBIT, "Cafe", "Food", "XUPI"),
        Transaction("t2", datetime(2025, 6, 2), None, TransactionType.CREDIT),
    ]
    df = transactions_frame(trans)
    assert list(df["amount"]) == [10.0, 0.0]
    assert list(df["type"]) == ["debit", "credit"]
    assert transactions_frame([]).empty
