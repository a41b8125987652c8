from datetime import datetime

from finsight.domain import Budget, Transaction, TransactionType
from finsight.events import (
    BUDGET_ALERT,
    TRANSACTION_ADDED,
    Event,
    EventBus,
    check_budget_handler,
    publish_transaction,
    register_default_handlers,
)

NOW = datetime(2025, 6, 1)


def make_event(payload):
    return Event(name=TRANSACTION_ADDED, ts=NOW.isoformat(), payload=payload)


def test_event_bus_subscribe_publish_unsubscribe():
    bus = EventBus()
    calls = []

    def handler(event: Event, payload: dict) -> dict:
        calls.append((event.name, payload))
        return {"ok": True}

    bus.subscribe(TRANSACTION_ADDED, handler)
    assert bus.publish(TRANSACTION_ADDED, {"amount": 1}) == [{"ok": True}]
    assert calls == [(TRANSACTION_ADDED, {"amount": 1})]

    bus.unsubscribe(TRANSACTION_ADDED, handler)
    assert bus.publish(TRANSACTION_ADDED, {"amount": 2}) == []
    assert len(calls) == 1


def test_publish_without_subscribers():
    assert EventBus().publish(BUDGET_ALERT, {}) == []


def test_check_budget_handler_under_threshold():
    payload = {"category": "Food", "amount": 100.0, "is_debit": True,
               "total_budget": 1000.0, "current_spent": 200.0, "warning_threshold": 90.0}
    assert check_budget_handler(make_event(payload), payload) == {"spent": 300.0}


def test_check_budget_handler_warning():
    payload = {"category": "Food", "amount": 150.0, "is_debit": True,
               "total_budget": 1000.0, "current_spent": 800.0, "warning_threshold": 90.0}
    result = check_budget_handler(make_event(payload), payload)
    assert result["level"] == "warning"
    assert "95%" in result["alert"]


def test_check_budget_handler_exceeded():
    payload = {"category": "Food", "amount": 500.0, "is_debit": True,
               "total_budget": 1000.0, "current_spent": 800.0}
    result = check_budget_handler(make_event(payload), payload)
    assert result["level"] == "over"
    assert "Budget exceeded" in result["alert"]
    assert result["spent"] == 1300.0


def test_check_budget_handler_ignores_credits_and_missing_budget():
    credit = {"category": "Food", "amount": 5000.0, "is_debit": False, "total_budget": 10.0}
    assert check_budget_handler(make_event(credit), credit) == {}
    no_budget = {"category": "Food", "amount": 5000.0, "is_debit": True, "total_budget": 0.0}
    assert "alert" not in check_budget_handler(make_event(no_budget), no_budget)


def test_check_budget_handler_is_pure():
    payload = {"category": "Food", "amount": 600.0, "is_debit": True,
               "total_budget": 1000.0, "current_spent": 0.0}
    copy = dict(payload)
    assert check_budget_handler(make_event(payload), payload) == check_budget_handler(make_event(copy), copy)
    assert payload == copy


def test_publish_transaction_forwards_alerts():
    bus = register_default_handlers(EventBus())
    forwarded = []
    bus.subscribe(BUDGET_ALERT, lambda event, payload: forwarded.append(payload) or {})

    budgets = (Budget("b1", "Food", 1000.0, NOW, NOW, True, 200.0),)
    t = Transaction("t9", NOW, 300.0, TransactionType.DEBIT, "Swiggy", "Food", "XUPI")

    alerts = publish_transaction(bus, t, budgets, {"Food": 1000.0})
    assert len(alerts) == 1
    assert alerts[0]["level"] == "over"
    assert alerts[0]["total_budget"] == 1200.0
    assert forwarded == alerts


def test_publish_transaction_no_alert_without_budget():
    bus = register_default_handlers(EventBus())
    t = Transaction("t9", NOW, 300.0, TransactionType.DEBIT, "Swiggy", "Travel")
    assert publish_transaction(bus, t, (), {}) == []
