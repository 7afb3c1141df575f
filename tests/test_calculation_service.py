"""
Tests for the calculation service and expense statistics.
"""
from decimal import Decimal

import pytest

from tripsplit.config.settings import Settings
from tripsplit.models import Family, Participant, TripSnapshot
from tripsplit.services.calculation_service import CalculationService
from tripsplit.services.currency_service import MissingExchangeRateError
from tripsplit.services.expense_service import summarize_expenses
from tripsplit.utils.constants import TrackingMode


@pytest.fixture
def config():
    return Settings(DEFAULT_CURRENCY="EUR", SETTLED_EPSILON="0.01", STRICT_EXCHANGE_RATES=False)


@pytest.fixture
def snapshot(trio, make_expense, make_settlement):
    return TripSnapshot(
        name="Ski trip",
        tracking_mode=TrackingMode.INDIVIDUALS,
        default_currency="eur",
        exchange_rates={"usd": Decimal("0.9")},
        participants=trio,
        expenses=[
            make_expense(90, "p-alice", participants=["p-alice", "p-bob", "p-carol"], category="Food"),
            make_expense(30, "p-bob", participants=["p-alice", "p-bob", "p-carol"]),
            make_expense(20, "p-carol", participants=["p-carol"], currency="USD", category="Food"),
        ],
        settlements=[make_settlement("p-bob", "p-alice", 5)],
    )


def test_calculate(config, snapshot):
    """Balances and plan are computed together in the trip's currency."""
    result = CalculationService(config).calculate(snapshot)

    balances = {b.id: b.balance for b in result.calculation.balances}
    assert balances == {
        "p-alice": Decimal(45),
        "p-bob": Decimal(-5),
        "p-carol": Decimal(-40),
    }
    assert result.calculation.total_expenses == Decimal(138)
    assert result.plan.currency == "EUR"
    assert [(t.from_id, t.to_id, t.amount) for t in result.plan.transactions] == [
        ("p-carol", "p-alice", Decimal("40.00")),
        ("p-bob", "p-alice", Decimal("5.00")),
    ]


def test_configured_currency_is_fallback(trio, make_expense):
    """Without a trip currency the configured one is used."""
    config = Settings(DEFAULT_CURRENCY="usd")
    snapshot = TripSnapshot(
        participants=trio,
        expenses=[make_expense(10, "p-alice", participants=["p-alice", "p-bob"], currency="USD")],
    )

    result = CalculationService(config).calculate(snapshot)

    assert result.plan.currency == "USD"
    assert result.calculation.total_expenses == Decimal(10)


def test_strict_setting(trio, make_expense):
    """Strict configuration propagates a missing rate."""
    config = Settings(STRICT_EXCHANGE_RATES=True)
    snapshot = TripSnapshot(
        default_currency="EUR",
        participants=trio,
        expenses=[make_expense(10, "p-alice", participants=["p-bob"], currency="GBP")],
    )

    with pytest.raises(MissingExchangeRateError):
        CalculationService(config).calculate(snapshot)


def test_calculate_debts(config, snapshot):
    """Each entity lists what it pays and receives."""
    debts = CalculationService(config).calculate_debts(snapshot)

    assert debts["p-alice"]["balance"] == Decimal(45)
    assert [c["from_name"] for c in debts["p-alice"]["credits"]] == ["Carol", "Bob"]
    assert debts["p-carol"]["debts"] == [
        {"to_id": "p-alice", "to_name": "Alice", "amount": Decimal("40.00")}
    ]
    assert debts["p-bob"]["credits"] == []


def test_get_my_settlement(config, snapshot):
    """The current user only sees their own payments."""
    transactions = CalculationService(config).get_my_settlement(snapshot, "p-bob")

    assert len(transactions) == 1
    assert transactions[0].to_name == "Alice"


def test_snapshot_from_json(config):
    """A JSON export is enough to settle a families trip."""
    raw = """
    {
        "tracking_mode": "families",
        "default_currency": "EUR",
        "families": [
            {"id": "f1", "family_name": "Smiths", "adults": 2, "children": 1},
            {"id": "f2", "family_name": "Jones", "adults": 1, "children": 0}
        ],
        "participants": [
            {"id": "p1", "name": "John", "family_id": "f1"},
            {"id": "p2", "name": "Tom", "family_id": "f2"}
        ],
        "expenses": [
            {
                "amount": "200",
                "currency": "EUR",
                "paid_by": "p2",
                "distribution": {
                    "type": "families",
                    "families": ["f1", "f2"],
                    "account_for_family_size": true
                }
            }
        ]
    }
    """
    snapshot = TripSnapshot.model_validate_json(raw)

    result = CalculationService(config).calculate(snapshot)

    assert result.plan.transactions[0].from_name == "Smiths"
    assert result.plan.transactions[0].amount == Decimal("150.00")
    assert result.plan.transactions[0].is_from_family


def test_summarize_expenses(snapshot):
    summary = summarize_expenses(
        snapshot.expenses,
        snapshot.participants,
        snapshot.default_currency,
        snapshot.exchange_rates,
    )

    assert summary.total_amount == Decimal(138)
    assert summary.expense_count == 3
    assert summary.by_category == {"Food": Decimal(108), "Uncategorized": Decimal(30)}
    assert summary.by_payer["Carol"] == Decimal(18)


def test_summarize_skips_unconvertible(trio, make_expense):
    expenses = [
        make_expense(10, "p-alice", participants=["p-alice"]),
        make_expense(10, "p-bob", participants=["p-bob"], currency="GBP"),
    ]

    summary = summarize_expenses(expenses, trio, "EUR", {})

    assert summary.expense_count == 1
    assert summary.by_payer == {"Alice": Decimal(10)}


def test_get_my_settlement_for_family_member(config, make_expense):
    """In families mode a member sees the payments of their family."""
    snapshot = TripSnapshot(
        tracking_mode=TrackingMode.FAMILIES,
        default_currency="EUR",
        families=[
            Family(id="f-a", family_name="A"),
            Family(id="f-b", family_name="B"),
        ],
        participants=[
            Participant(id="p-a", name="Anna", family_id="f-a"),
            Participant(id="p-b", name="Ben", family_id="f-b"),
        ],
        expenses=[make_expense(100, "p-a", families=["f-a", "f-b"])],
    )
    service = CalculationService(config)

    assert service.resolve_entity(snapshot, "p-b") == "f-b"
    assert service.resolve_entity(snapshot, "f-a") == "f-a"

    transactions = service.get_my_settlement(snapshot, "p-b")

    assert [(t.from_name, t.to_name, t.amount) for t in transactions] == [
        ("B", "A", Decimal("50.00"))
    ]
