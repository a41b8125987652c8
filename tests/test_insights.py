from finsight.domain import MonthlyPoint
from finsight.insights import (
    average_monthly_spending,
    month_over_month_change,
    savings,
    savings_rate,
    share_of_total,
)


def point(month, spending, income=0.0):
    return MonthlyPoint(2025, month, spending, income)


def test_savings_and_rate():
    assert savings(2000, 800) == 1200
    assert savings_rate(2000, 800) == 60.0
    assert savings_rate(2000, 3000) == -50.0
    assert savings_rate(0, 800) == 0.0


def test_month_over_month_change():
    assert month_over_month_change([point(1, 100), point(2, 150)]) == 50.0
    assert month_over_month_change([point(1, 200), point(2, 100)]) == -50.0
    assert month_over_month_change([point(1, 0), point(2, 100)]) == 0.0
    assert month_over_month_change([point(1, 100)]) == 0.0
    assert month_over_month_change([]) == 0.0


def test_average_monthly_spending():
    assert average_monthly_spending([point(1, 100), point(2, 300)]) == 200.0
    assert average_monthly_spending([]) == 0.0


def test_share_of_total():
    assert share_of_total({"Food": 300, "Travel": 100}) == {"Food": 75.0, "Travel": 25.0}
    assert share_of_total({"Food": 0}) == {"Food": 0.0}
    assert share_of_total({}) == {}
