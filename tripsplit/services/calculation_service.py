"""Service for calculating debts and settlements."""

import logging
from typing import Any, Dict, List, Optional

from tripsplit.config.settings import Settings, settings
from tripsplit.models import (
    BalanceCalculation, SettlementTransaction, TripSettlement, TripSnapshot
)
from tripsplit.services.balance_service import calculate_balances
from tripsplit.services.distribution_service import resolve_participant_entity
from tripsplit.services.settlement_service import (
    calculate_optimal_settlement, get_transactions_for_entity
)

logger = logging.getLogger(__name__)


class CalculationService:
    """Service for debt calculations."""

    def __init__(self, config: Optional[Settings] = None):
        self.settings = config or settings

    def calculate(self, snapshot: TripSnapshot) -> TripSettlement:
        """
        Calculate balances and the optimal settlement plan for a trip.

        The trip's own default currency wins over the configured one.
        """
        currency = snapshot.default_currency or self.settings.currency
        epsilon = self.settings.settled_epsilon

        calculation = calculate_balances(
            snapshot.expenses,
            snapshot.participants,
            snapshot.families,
            snapshot.tracking_mode,
            settlements=snapshot.settlements,
            default_currency=currency,
            exchange_rates=snapshot.exchange_rates,
            epsilon=epsilon,
            strict=self.settings.strict_exchange_rates
        )

        if not calculation.is_complete:
            logger.warning(
                f"Trip {snapshot.name or ''}: {len(calculation.skipped_expenses)} expenses "
                f"and {len(calculation.skipped_settlements)} settlements not counted"
            )

        plan = calculate_optimal_settlement(
            calculation.balances, currency, epsilon
        )

        logger.info(
            f"Calculated {len(calculation.balances)} balances, "
            f"{plan.total_transactions} transactions needed"
        )

        return TripSettlement(calculation=calculation, plan=plan)

    def calculate_debts(
            self,
            snapshot: TripSnapshot
    ) -> Dict[str, Dict[str, Any]]:
        """
        Calculate who owes whom and by how much.

        Returns:
            Dictionary with entity ID as key and dict containing:
            - name: participant or family name
            - is_family: whether the entity is a family
            - balance: net balance (positive = owed, negative = owes)
            - debts: list of {to_id, to_name, amount} they need to pay
            - credits: list of {from_id, from_name, amount} they will receive
        """
        result = self.calculate(snapshot)
        return build_debt_report(result.calculation, result.plan.transactions)

    def resolve_entity(self, snapshot: TripSnapshot, entity_id: str) -> str:
        """
        Entity whose balance covers the given ID.

        In families mode a family member's participant ID stands for the
        family; family IDs and everybody else map to themselves.
        """
        return resolve_participant_entity(
            entity_id,
            {p.id: p for p in snapshot.participants},
            {f.id: f for f in snapshot.families},
            snapshot.tracking_mode
        )

    def get_my_settlement(
            self,
            snapshot: TripSnapshot,
            entity_id: str
    ) -> List[SettlementTransaction]:
        """Payments the given participant (or their family) is part of."""
        result = self.calculate(snapshot)
        return get_transactions_for_entity(
            result.plan, self.resolve_entity(snapshot, entity_id)
        )


def build_debt_report(
        calculation: BalanceCalculation,
        transactions: List[SettlementTransaction]
) -> Dict[str, Dict[str, Any]]:
    """Group plan transactions by the entity that pays or receives them."""
    result = {}

    for entity in calculation.balances:
        debts = []
        credits = []

        for t in transactions:
            if t.from_id == entity.id:
                debts.append({
                    "to_id": t.to_id,
                    "to_name": t.to_name,
                    "amount": t.amount
                })
            elif t.to_id == entity.id:
                credits.append({
                    "from_id": t.from_id,
                    "from_name": t.from_name,
                    "amount": t.amount
                })

        result[entity.id] = {
            "name": entity.name,
            "is_family": entity.is_family,
            "balance": entity.balance,
            "debts": debts,
            "credits": credits
        }

    return result
