import logging
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Mapping, NamedTuple

from finsight.budgets import rollover_adjusted_budget
from finsight.domain import Budget, Transaction
from finsight.functional import safe_budget

logger = logging.getLogger(__name__)

__all__ = [
    'Event', 'EventBus', 'TRANSACTION_ADDED', 'BUDGET_ALERT',
    'check_budget_handler', 'register_default_handlers', 'publish_transaction',
]

TRANSACTION_ADDED = "TRANSACTION_ADDED"
BUDGET_ALERT = "BUDGET_ALERT"

Handler = Callable[['Event', dict], dict]


class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


class EventBus:
    def __init__(self):
        self._subscribers: Dict[str, List[Handler]] = {}

    def subscribe(self, name: str, handler: Handler) -> None:
        self._subscribers.setdefault(name, []).append(handler)

    def unsubscribe(self, name: str, handler: Handler) -> None:
        handlers = self._subscribers.get(name, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, name: str, payload: dict) -> List[dict]:
        handlers = list(self._subscribers.get(name, []))
        if not handlers:
            return []

        event = Event(name=name, ts=datetime.now().isoformat(), payload=payload)
        return [handler(event, payload) for handler in handlers]


def check_budget_handler(event: Event, payload: dict) -> dict:
    """Return an alert when a debit pushes its category past the warning line.

    Expects ``category``, ``amount``, ``is_debit``, ``total_budget``,
    ``current_spent`` and ``warning_threshold`` in the payload.
    """
    if not payload.get("is_debit"):
        return {}

    category = payload.get("category", "")
    total = payload.get("total_budget") or 0.0
    new_spent = payload.get("current_spent", 0.0) + (payload.get("amount") or 0.0)
    if total <= 0:
        return {"spent": new_spent}

    pct = new_spent / total * 100
    if new_spent > total:
        return {
            "alert": f"Budget exceeded for {category}: {new_spent:,.0f} / {total:,.0f}",
            "level": "over",
            "category": category,
            "spent": new_spent,
            "total_budget": total,
        }
    if pct >= payload.get("warning_threshold", 90.0):
        return {
            "alert": f"{pct:.0f}% of {category} budget used: {new_spent:,.0f} / {total:,.0f}",
            "level": "warning",
            "category": category,
            "spent": new_spent,
            "total_budget": total,
        }
    return {"spent": new_spent}


def register_default_handlers(bus: EventBus) -> EventBus:
    bus.subscribe(TRANSACTION_ADDED, check_budget_handler)
    return bus


def publish_transaction(
    bus: EventBus,
    t: Transaction,
    budgets: Iterable[Budget],
    spent_by_category: Mapping[str, float],
    warning_threshold: float = 90.0,
) -> List[dict]:
    """Publish ``t`` and forward any alerts it raised as BUDGET_ALERT events."""
    total = safe_budget(budgets, t.category).map(rollover_adjusted_budget).get_or_else(0.0)
    payload = {
        "transaction_id": t.id,
        "category": t.category,
        "amount": t.value,
        "is_debit": t.is_debit,
        "total_budget": total,
        "current_spent": spent_by_category.get(t.category, 0.0),
        "warning_threshold": warning_threshold,
    }
    alerts = [r for r in bus.publish(TRANSACTION_ADDED, payload) if "alert" in r]
    for alert in alerts:
        logger.warning(alert["alert"])
        bus.publish(BUDGET_ALERT, alert)
    return alerts
