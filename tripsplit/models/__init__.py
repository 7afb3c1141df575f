"""Data models for the balance engine."""

from tripsplit.models.participant import EntityId, Participant, Family
from tripsplit.models.expense import (
    Expense,
    ExpenseDistribution,
    IndividualsDistribution,
    FamiliesDistribution,
    MixedDistribution,
)
from tripsplit.models.settlement import (
    Settlement,
    SettlementTransaction,
    OptimalSettlementPlan,
)
from tripsplit.models.balance import (
    ParticipantBalance,
    BalanceCalculation,
    ExpenseSummary,
)
from tripsplit.models.history import TransactionItem
from tripsplit.models.trip import TripSnapshot, TripSettlement

__all__ = [
    "EntityId",
    "Participant",
    "Family",
    "Expense",
    "ExpenseDistribution",
    "IndividualsDistribution",
    "FamiliesDistribution",
    "MixedDistribution",
    "Settlement",
    "SettlementTransaction",
    "OptimalSettlementPlan",
    "ParticipantBalance",
    "BalanceCalculation",
    "ExpenseSummary",
    "TripSnapshot",
    "TripSettlement",
    "TransactionItem",
]
