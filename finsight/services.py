import logging
from typing import Any, Callable, Dict, Iterable, Optional, Sequence

from finsight import aggregator, budgets as budget_figures, insights
from finsight.config import Settings, get_settings
from finsight.domain import UPI_SENTINEL
from finsight.functional import validate_transaction

logger = logging.getLogger(__name__)

Validator = Callable[..., Sequence[str]]
Calculator = Callable[..., Dict[str, Any]]


class BudgetService:
    """Facade for the monthly budget report.

    validators: functions taking (year, month, transactions, budgets) -> Sequence[str]
    calculators: functions taking (year, month, transactions, budgets, acc) -> dict;
        ``acc`` holds the merged output of the calculators that ran before.
    """

    def __init__(self, validators: Sequence[Validator], calculators: Sequence[Calculator]):
        self.validators = validators
        self.calculators = calculators

    def monthly_report(self, year: int, month: int, transactions: Iterable, budgets: Iterable) -> Dict[str, Any]:
        transactions, budgets = tuple(transactions), tuple(budgets)
        report = {
            "month": f"{year:04d}-{month:02d}",
            "validation": [],
            "steps": [],
            "result": {},
        }

        for v in self.validators:
            name = getattr(v, "__name__", str(v))
            try:
                msgs = list(v(year, month, transactions, budgets))
            except Exception as e:
                logger.exception("Validator %s failed", name)
                msgs = [f"validator_error: {e}"]
            report["validation"].append({"validator": name, "messages": msgs})

        acc: Dict[str, Any] = {}
        for calc in self.calculators:
            out = calc(year, month, transactions, budgets, acc)
            report["steps"].append({"calculator": getattr(calc, "__name__", str(calc)), "output": out})
            if isinstance(out, dict):
                acc.update(out)

        report["result"] = acc
        logger.debug("Budget report for %s: %d steps", report["month"], len(report["steps"]))
        return report


class ReportService:
    """Facade for analytics reports built from injected aggregators.

    aggregators: functions taking (year, month, transactions, acc) -> dict.
    """

    def __init__(self, aggregators: Sequence[Calculator]):
        self.aggregators = aggregators

    def analytics_report(self, year: int, month: int, transactions: Iterable) -> Dict[str, Any]:
        transactions = tuple(transactions)
        report = {"month": f"{year:04d}-{month:02d}", "steps": [], "result": {}}
        acc: Dict[str, Any] = {}
        for agg in self.aggregators:
            out = agg(year, month, transactions, acc)
            report["steps"].append({"aggregator": getattr(agg, "__name__", str(agg)), "output": out})
            if isinstance(out, dict):
                acc.update(out)
        report["result"] = acc
        return report


# validators

def invalid_transactions(year, month, transactions, budgets) -> list[str]:
    return [
        r.get_error()["message"]
        for r in map(validate_transaction, transactions)
        if r.is_left()
    ]


def unparsed_amounts(year, month, transactions, budgets) -> list[str]:
    month_txns = aggregator.transactions_in_month(transactions, year, month)
    return [f"Transaction {t.id} has no amount" for t in month_txns if t.amount is None]


def duplicate_budgets(year, month, transactions, budgets) -> list[str]:
    seen, msgs = set(), []
    for b in budgets:
        if b.category in seen:
            msgs.append(f"More than one budget for category {b.category}")
        seen.add(b.category)
    return msgs


# budget calculators

def calc_spending(year, month, transactions, budgets, acc) -> dict:
    return {
        "total_spending": aggregator.monthly_total_spending(transactions, year, month),
        "income": aggregator.monthly_income(transactions, year, month),
        "category_spending": aggregator.category_spending(transactions, year, month),
    }


def make_calc_budget_status(warning_threshold: float) -> Calculator:
    def calc_budget_status(year, month, transactions, budgets, acc) -> dict:
        spent = acc.get("category_spending")
        if spent is None:
            spent = aggregator.category_spending(transactions, year, month)
        return {"budget_status": budget_figures.budget_status(budgets, spent, warning_threshold)}

    return calc_budget_status


def calc_overall(year, month, transactions, budgets, acc) -> dict:
    spent = acc.get("total_spending")
    if spent is None:
        spent = aggregator.monthly_total_spending(transactions, year, month)
    total = sum(budget_figures.rollover_adjusted_budget(b) for b in budgets)
    return {
        "total_budget": total,
        "overall_percentage": budget_figures.overall_budget_percentage(spent, budgets),
        "overall_remaining": budget_figures.remaining_budget(spent, total),
    }


# analytics aggregators

def make_agg_series(month_count: int) -> Calculator:
    def agg_series(year, month, transactions, acc) -> dict:
        series = aggregator.monthly_series(transactions, month_count, (year, month))
        return {
            "series": series,
            "average_monthly_spending": insights.average_monthly_spending(series),
            "month_over_month_change": insights.month_over_month_change(series),
        }

    return agg_series


def agg_categories(year, month, transactions, acc) -> dict:
    totals = aggregator.category_spending(transactions, year, month)
    return {
        "category_totals": aggregator.top_categories(totals, len(totals)),
        "category_share": insights.share_of_total(totals),
    }


def make_agg_merchants(top: int) -> Calculator:
    def agg_merchants(year, month, transactions, acc) -> dict:
        merchants = aggregator.merchant_totals(transactions, top)
        return {
            "merchant_totals": merchants,
            "merchant_share": insights.share_of_total(dict(merchants)),
        }

    return agg_merchants


def make_agg_payment_methods(sentinel: str) -> Calculator:
    def agg_payment_methods(year, month, transactions, acc) -> dict:
        totals = aggregator.payment_method_totals(transactions)
        breakdown = aggregator.payment_method_category_breakdown(transactions)
        upi, cards = aggregator.split_upi_and_cards(totals, sentinel)
        return {
            "payment_method_totals": totals,
            "payment_method_breakdown": breakdown,
            "payment_method_monthly": aggregator.payment_method_monthly(transactions),
            "upi_total": upi,
            "card_totals": cards,
            "featured_methods": aggregator.top_payment_methods(breakdown, 2, sentinel),
        }

    return agg_payment_methods


def agg_savings(year, month, transactions, acc) -> dict:
    income = aggregator.monthly_income(transactions, year, month)
    spending = aggregator.monthly_total_spending(transactions, year, month)
    return {
        "savings": insights.savings(income, spending),
        "savings_rate": insights.savings_rate(income, spending),
    }


def default_budget_service(settings: Optional[Settings] = None) -> BudgetService:
    settings = settings or get_settings()
    return BudgetService(
        validators=[invalid_transactions, unparsed_amounts, duplicate_budgets],
        calculators=[
            calc_spending,
            make_calc_budget_status(settings.BUDGET_WARNING_PERCENT),
            calc_overall,
        ],
    )


def default_report_service(settings: Optional[Settings] = None) -> ReportService:
    settings = settings or get_settings()
    return ReportService(aggregators=[
        make_agg_series(settings.SERIES_MONTHS),
        agg_categories,
        make_agg_merchants(settings.TOP_MERCHANTS),
        make_agg_payment_methods(settings.UPI_SENTINEL or UPI_SENTINEL),
        agg_savings,
    ])
