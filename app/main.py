import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging

import pandas as pd
import streamlit as st

from finsight.aggregator import available_months, latest_balance, unique_accounts
from finsight.config import get_settings, setup_logging
from finsight.frames import (
    breakdown_frame,
    budget_status_frame,
    series_frame,
    totals_frame,
    transactions_frame,
)
from finsight.services import default_budget_service, default_report_service
from finsight.transforms import load_seed

settings = get_settings()
setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger("finsight.app")

st.set_page_config(page_title=settings.PROJECT_NAME, layout="wide")

if "snapshot" not in st.session_state:
    st.session_state.snapshot = load_seed(settings.SEED_PATH)

categories, transactions, budgets = st.session_state.snapshot
cur = settings.CURRENCY


def money(value: float) -> str:
    return f"{value:,.0f} {cur}"


months = available_months(transactions)
if not months:
    st.info("No transactions loaded.")
    st.stop()

selected = st.sidebar.selectbox(
    "Month",
    options=months,
    format_func=lambda ym: pd.Timestamp(year=ym[0], month=ym[1], day=1).strftime("%B %Y"),
)
year, month = selected

menu = st.sidebar.radio("Menu", ["💰 Budgets", "📊 Analytics", "💳 Cards", "🧾 Transactions"])

budget_report = default_budget_service(settings).monthly_report(year, month, transactions, budgets)
analytics = default_report_service(settings).analytics_report(year, month, transactions)
logger.debug("Rendering %s for %04d-%02d", menu, year, month)

if menu == "💰 Budgets":
    st.title("💰 Budgets")
    result = budget_report["result"]

    k1, k2, k3 = st.columns(3)
    with k1:
        st.metric("Total Budget", money(result["total_budget"]))
    with k2:
        st.metric("Spent", money(result["total_spending"]))
    with k3:
        st.metric("Remaining", money(result["overall_remaining"]))
    st.progress(result["overall_percentage"] / 100)

    for status in result["budget_status"]:
        label = f"{status.category}"
        if status.level == "over":
            label += " ⚠️ over budget"
        elif status.level == "warning":
            label += " ⚠️"
        st.metric(label, f"{money(status.spent)} / {money(status.total)}", f"{money(status.remaining)} remaining")
        st.progress(status.percentage / 100)

    issues = [m for v in budget_report["validation"] for m in v["messages"]]
    if issues:
        with st.expander(f"Data issues ({len(issues)})"):
            for msg in issues:
                st.caption(msg)

    st.dataframe(budget_status_frame(result["budget_status"]), use_container_width=True)

elif menu == "📊 Analytics":
    st.title("📊 Analytics")
    result = analytics["result"]
    series = result["series"]
    current = series[-1] if series else None

    k1, k2, k3, k4 = st.columns(4)
    with k1:
        st.metric("Spending", money(current.spending if current else 0))
    with k2:
        st.metric("Income", money(current.income if current else 0))
    with k3:
        st.metric("Savings", money(result["savings"]), f"{result['savings_rate']:.1f}% savings rate")
    with k4:
        st.metric(
            "Avg monthly spend",
            money(result["average_monthly_spending"]),
            f"{result['month_over_month_change']:+.1f}% vs last month",
        )

    st.subheader("Monthly trend")
    st.dataframe(series_frame(series), use_container_width=True)

    col1, col2 = st.columns(2)
    with col1:
        st.subheader("Categories")
        st.dataframe(totals_frame(result["category_totals"], label="Category"), use_container_width=True)
    with col2:
        st.subheader(f"Top {settings.TOP_MERCHANTS} merchants")
        st.dataframe(totals_frame(result["merchant_totals"], label="Merchant"), use_container_width=True)

elif menu == "💳 Cards":
    st.title("💳 Payment methods")
    result = analytics["result"]
    upi, cards = result["upi_total"], result["card_totals"]
    total = upi + sum(cards.values())

    k1, k2 = st.columns(2)
    with k1:
        st.metric("UPI", money(upi), f"{(upi / total * 100) if total else 0:.1f}% of total")
    with k2:
        cards_total = sum(cards.values())
        st.metric("Cards", money(cards_total), f"{(cards_total / total * 100) if total else 0:.1f}% of total")

    usage = unique_accounts(transactions)
    card_df = totals_frame(cards, label="Card")
    if not card_df.empty:
        card_df["Transactions"] = card_df["Card"].map(lambda d: usage.get(d, 0))
        card_df["Card"] = card_df["Card"].map(lambda d: f"****{d}")
    st.dataframe(card_df, use_container_width=True)

    st.subheader("Where each method goes")
    breakdown = result["payment_method_breakdown"]
    featured = {m: breakdown[m] for m in result["featured_methods"]}
    st.dataframe(breakdown_frame(featured), use_container_width=True)

    balance = latest_balance(sorted(transactions, key=lambda t: t.timestamp, reverse=True))
    if balance is not None:
        st.caption(f"Last reported balance: {money(balance)}")

elif menu == "🧾 Transactions":
    st.title("🧾 Transactions")
    df = transactions_frame(transactions)
    if df.empty:
        st.info("No transactions to display.")
    else:
        chosen = st.multiselect("Category", options=[c.name for c in categories], default=[])
        if chosen:
            df = df[df["category"].isin(chosen)]
        st.dataframe(df.sort_values("date", ascending=False), use_container_width=True)
        st.download_button(
            "⬇️ Download CSV",
            df.to_csv(index=False),
            file_name="transactions.csv",
            mime="text/csv",
        )
