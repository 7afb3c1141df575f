"""
Tests for display formatting.
"""
from decimal import Decimal

from tripsplit.models import ExpenseSummary, OptimalSettlementPlan, SettlementTransaction
from tripsplit.utils.constants import BalanceStatus, MSG_ALL_SETTLED, MSG_NO_TRANSACTIONS
from tripsplit.utils.formatters import (
    format_amount,
    format_balance,
    format_debt_calculation,
    format_expense_summary,
    format_settlement_plan,
    format_settlement_transaction,
    get_balance_status,
)


def test_balance_status_uses_epsilon():
    """Status matches the settlement plan's notion of settled."""
    assert get_balance_status(Decimal("12.5")) == BalanceStatus.CREDITOR
    assert get_balance_status(Decimal("-0.02")) == BalanceStatus.DEBTOR
    assert get_balance_status(Decimal("0.01")) == BalanceStatus.SETTLED
    assert get_balance_status(Decimal("-0.005")) == BalanceStatus.SETTLED


def test_format_amount():
    assert format_amount(Decimal("1234.5"), "EUR") == "€1,234.50"
    assert format_amount(Decimal("10"), "usd") == "$10.00"
    assert format_amount(Decimal("1500.4"), "JPY") == "¥1,500"
    assert format_amount(Decimal("7.125"), "SEK") == "7.13 SEK"
    assert format_amount(Decimal("-3"), "GBP") == "-£3.00"


def test_format_balance():
    assert format_balance(Decimal("50"), "EUR") == "+€50.00"
    assert format_balance(Decimal("-50"), "EUR") == "-€50.00"
    assert format_balance(Decimal("-0.004"), "EUR") == "€0.00"


def test_format_settlement_transaction():
    transaction = SettlementTransaction(
        from_id="b", from_name="Bob", to_id="a", to_name="Alice", amount=Decimal("50")
    )

    assert format_settlement_transaction(transaction, "EUR") == "Bob pays Alice: €50.00"


def test_format_settlement_plan():
    empty = OptimalSettlementPlan(currency="EUR")
    plan = OptimalSettlementPlan(
        transactions=[
            SettlementTransaction(from_id="b", from_name="Bob", to_id="a",
                                  to_name="Alice", amount=Decimal("50")),
        ],
        total_transactions=1,
        currency="USD",
    )

    assert format_settlement_plan(empty) == MSG_NO_TRANSACTIONS
    assert format_settlement_plan(plan) == "Payments needed: 1\n1. Bob pays Alice: $50.00"


def test_format_debt_calculation():
    debts = {
        "a": {"name": "Alice", "is_family": False, "balance": Decimal(50), "debts": [],
              "credits": [{"from_id": "b", "from_name": "Bob", "amount": Decimal(50)}]},
        "b": {"name": "Bob", "is_family": False, "balance": Decimal(-50),
              "debts": [{"to_id": "a", "to_name": "Alice", "amount": Decimal(50)}], "credits": []},
        "c": {"name": "Carol", "is_family": False, "balance": Decimal(0), "debts": [], "credits": []},
    }

    message = format_debt_calculation(debts, "EUR")

    assert "Owes:" in message
    assert "Bob (total: €50.00)" in message
    assert "  -> Alice: €50.00" in message
    assert "  <- Bob: €50.00" in message
    assert "Settled:\n  * Carol" in message


def test_format_debt_calculation_all_settled():
    debts = {
        "a": {"name": "Alice", "is_family": False, "balance": Decimal(0), "debts": [], "credits": []},
    }

    assert format_debt_calculation(debts).endswith(MSG_ALL_SETTLED)


def test_format_expense_summary():
    summary = ExpenseSummary(
        total_amount=Decimal(200),
        expense_count=2,
        by_category={"Food": Decimal(150), "Transport": Decimal(50)},
        by_payer={"Alice": Decimal(200)},
        currency="EUR",
    )

    message = format_expense_summary(summary)

    assert "Total spent: €200.00" in message
    assert "  * Food: €150.00 (75.0%)" in message
    assert "  * Alice: €200.00 (100.0%)" in message
    assert message.index("Food") < message.index("Transport")
