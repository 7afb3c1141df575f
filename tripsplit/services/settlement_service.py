"""Service for turning balances into a minimal payment plan."""

import heapq
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Tuple

from tripsplit.models import (
    OptimalSettlementPlan, ParticipantBalance, SettlementTransaction
)
from tripsplit.utils.constants import (
    DEFAULT_CURRENCY, SETTLED_EPSILON, get_minor_unit
)

logger = logging.getLogger(__name__)

# (-outstanding, name, id, position); heapq pops the largest amount first
_HeapEntry = Tuple[Decimal, str, str, int]


def calculate_optimal_settlement(
        balances: Iterable[ParticipantBalance],
        currency: str = DEFAULT_CURRENCY,
        epsilon: Decimal = SETTLED_EPSILON
) -> OptimalSettlementPlan:
    """
    Calculate the payment plan with the fewest transactions.

    Algorithm:
    1. Separate into debtors (balance < -epsilon) and creditors (> epsilon)
    2. Match the largest debtor with the largest creditor
    3. Pay the smaller of the two amounts, which settles at least one side
    4. Put back whoever still has more than epsilon outstanding and repeat

    Every transaction settles at least one entity, so N entities with a
    non-zero balance need at most N - 1 transactions. Equal amounts are
    ordered by name, which keeps the plan stable for identical input.

    Args:
        balances: Participant/family balances
        currency: Currency for the transactions
        epsilon: Balances closer to zero than this are settled

    Returns:
        Settlement plan; amounts rounded to the currency's minor unit
    """
    entries = list(balances)
    minor_unit = get_minor_unit(currency)

    debtors: List[_HeapEntry] = []
    creditors: List[_HeapEntry] = []

    for position, entry in enumerate(entries):
        if entry.balance < -epsilon:
            debtors.append((entry.balance, entry.name, entry.id, position))
        elif entry.balance > epsilon:
            creditors.append((-entry.balance, entry.name, entry.id, position))

    heapq.heapify(debtors)
    heapq.heapify(creditors)

    transactions = []

    while debtors and creditors:
        debt_key, debtor_name, debtor_id, debtor_pos = heapq.heappop(debtors)
        credit_key, creditor_name, creditor_id, creditor_pos = heapq.heappop(creditors)

        debt = -debt_key
        credit = -credit_key
        amount = min(debt, credit)

        # Round only here so the working balances keep full precision
        rounded = amount.quantize(minor_unit, rounding=ROUND_HALF_UP)
        if rounded > 0:
            transactions.append(SettlementTransaction(
                from_id=debtor_id,
                from_name=debtor_name,
                to_id=creditor_id,
                to_name=creditor_name,
                amount=rounded,
                is_from_family=entries[debtor_pos].is_family,
                is_to_family=entries[creditor_pos].is_family
            ))

        debt -= amount
        credit -= amount

        if debt > epsilon:
            heapq.heappush(debtors, (-debt, debtor_name, debtor_id, debtor_pos))
        if credit > epsilon:
            heapq.heappush(creditors, (-credit, creditor_name, creditor_id, creditor_pos))

    if debtors or creditors:
        logger.warning(
            f"Balances do not sum to zero: {len(debtors)} debtors and "
            f"{len(creditors)} creditors left unmatched"
        )

    return OptimalSettlementPlan(
        transactions=transactions,
        total_transactions=len(transactions),
        currency=currency.upper()
    )


def get_transactions_for_entity(
        plan: OptimalSettlementPlan,
        entity_id: str
) -> List[SettlementTransaction]:
    """Transactions in which the entity pays or receives."""
    return [
        t for t in plan.transactions
        if t.from_id == entity_id or t.to_id == entity_id
    ]


def are_balances_settled(
        balances: Iterable[ParticipantBalance],
        epsilon: Decimal = SETTLED_EPSILON
) -> bool:
    """Check if all balances are settled (within epsilon of zero)."""
    return all(abs(b.balance) <= epsilon for b in balances)


def calculate_total_debt(balances: Iterable[ParticipantBalance]) -> Decimal:
    """Sum of all negative balances, as a positive amount."""
    return sum((-b.balance for b in balances if b.balance < 0), Decimal(0))


def calculate_total_credit(balances: Iterable[ParticipantBalance]) -> Decimal:
    """Sum of all positive balances."""
    return sum((b.balance for b in balances if b.balance > 0), Decimal(0))
