"""Service for aggregating expenses and settlements into balances."""

import logging
from collections import defaultdict
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from tripsplit.models import (
    BalanceCalculation, EntityId, Expense, Family, Participant,
    ParticipantBalance, Settlement
)
from tripsplit.services.currency_service import (
    MissingExchangeRateError, RateValue, convert_currency
)
from tripsplit.services.distribution_service import (
    resolve_participant_entity, resolve_shares
)
from tripsplit.utils.constants import (
    DEFAULT_CURRENCY, SETTLED_EPSILON, TrackingMode
)

logger = logging.getLogger(__name__)


def calculate_balances(
        expenses: Iterable[Expense],
        participants: Iterable[Participant],
        families: Iterable[Family],
        tracking_mode: Union[TrackingMode, str],
        settlements: Iterable[Settlement] = (),
        default_currency: str = DEFAULT_CURRENCY,
        exchange_rates: Optional[Mapping[str, RateValue]] = None,
        epsilon: Decimal = SETTLED_EPSILON,
        strict: bool = False
) -> BalanceCalculation:
    """
    Calculate net balance for each participant or family.

    Balance = Total paid - Total share + Net settlements
    Positive balance = entity is owed money
    Negative balance = entity owes money

    Every amount is converted into default_currency. Shares are resolved on
    the expense's original amount and converted one by one.

    A single bad record never aborts the calculation: expenses and
    settlements that cannot be converted or attributed are left out and
    listed in the result.

    Args:
        expenses: All expenses for the trip
        participants: All participants in the trip
        families: All families in the trip
        tracking_mode: 'individuals' or 'families'
        settlements: Recorded payments between entities
        default_currency: Currency of the result
        exchange_rates: Currency code -> units of default_currency per unit
        epsilon: Balances closer to zero than this are settled
        strict: Raise on a missing exchange rate instead of skipping

    Raises:
        MissingExchangeRateError: only when strict is set
    """
    mode = TrackingMode(tracking_mode)
    currency = default_currency.upper()
    participants = list(participants)
    families = list(families)

    participants_by_id = {p.id: p for p in participants}
    families_by_id = {f.id: f for f in families}
    entities = _build_entities(participants, families, mode)

    def resolve_entity(raw_id: str) -> Optional[EntityId]:
        if raw_id in participants_by_id:
            entity_id = resolve_participant_entity(
                raw_id, participants_by_id, families_by_id, mode
            )
        else:
            entity_id = EntityId(raw_id)
        return entity_id if entity_id in entities else None

    total_paid = defaultdict(lambda: Decimal(0))
    total_share = defaultdict(lambda: Decimal(0))
    net_settlements = defaultdict(lambda: Decimal(0))
    expense_counts = defaultdict(int)
    total_expenses = Decimal(0)

    skipped_expenses: List[str] = []
    skipped_settlements: List[str] = []
    missing_currencies: List[str] = []

    for index, expense in enumerate(expenses):
        label = expense.id or f"#{index}"

        payer_id = resolve_entity(expense.paid_by)
        if payer_id is None:
            logger.warning(f"Expense {label}: unknown payer {expense.paid_by}, skipped")
            skipped_expenses.append(label)
            continue

        shares = resolve_shares(expense, participants, families, mode)
        if not shares:
            logger.warning(f"Expense {label}: nobody shares it, skipped")
            skipped_expenses.append(label)
            continue

        try:
            paid = convert_currency(
                expense.amount, expense.currency, currency, exchange_rates
            )
            converted_shares = {
                entity_id: convert_currency(
                    share, expense.currency, currency, exchange_rates
                )
                for entity_id, share in shares.items()
            }
        except MissingExchangeRateError as e:
            if strict:
                raise
            logger.warning(f"Expense {label}: {e}, skipped")
            skipped_expenses.append(label)
            if e.from_currency not in missing_currencies:
                missing_currencies.append(e.from_currency)
            continue

        total_expenses += paid
        total_paid[payer_id] += paid
        involved = {payer_id}

        for entity_id, share in converted_shares.items():
            if entity_id not in entities:
                logger.warning(
                    f"Expense {label}: share for unknown entity {entity_id} ignored"
                )
                continue
            total_share[entity_id] += share
            involved.add(entity_id)

        for entity_id in involved:
            expense_counts[entity_id] += 1

    for index, settlement in enumerate(settlements):
        label = settlement.id or f"#{index}"

        from_id = resolve_entity(settlement.from_participant_id)
        to_id = resolve_entity(settlement.to_participant_id)
        if from_id is None or to_id is None:
            logger.warning(f"Settlement {label}: unknown participant, skipped")
            skipped_settlements.append(label)
            continue

        if from_id == to_id:
            # Payment inside one family does not move its balance
            continue

        try:
            amount = convert_currency(
                settlement.amount, settlement.currency, currency, exchange_rates
            )
        except MissingExchangeRateError as e:
            if strict:
                raise
            logger.warning(f"Settlement {label}: {e}, skipped")
            skipped_settlements.append(label)
            if e.from_currency not in missing_currencies:
                missing_currencies.append(e.from_currency)
            continue

        # Paying reduces the payer's debt and the receiver's credit
        net_settlements[from_id] += amount
        net_settlements[to_id] -= amount

    balances = []
    for entity_id, (name, is_family) in entities.items():
        paid = total_paid[entity_id]
        share = total_share[entity_id]
        settled = net_settlements[entity_id]

        balances.append(ParticipantBalance(
            id=entity_id,
            name=name,
            is_family=is_family,
            total_paid=paid,
            total_share=share,
            net_settlements=settled,
            balance=paid - share + settled,
            expense_count=expense_counts[entity_id]
        ))

    balances.sort(key=lambda b: (-b.balance, b.name, b.id))

    logger.debug(
        f"Aggregated {len(balances)} balances, total {total_expenses} {currency}, "
        f"{len(skipped_expenses)} expenses and {len(skipped_settlements)} settlements skipped"
    )

    return BalanceCalculation(
        balances=balances,
        total_expenses=total_expenses,
        suggested_next_payer=find_suggested_payer(balances, epsilon),
        currency=currency,
        skipped_expenses=skipped_expenses,
        skipped_settlements=skipped_settlements,
        missing_currencies=missing_currencies
    )


def find_suggested_payer(
        balances: Iterable[ParticipantBalance],
        epsilon: Decimal = SETTLED_EPSILON
) -> Optional[ParticipantBalance]:
    """
    Find the participant/family who should pay next.

    This is the entity that owes the most among those with at least one
    expense. Ties go to the alphabetically first name.
    """
    candidates = [
        b for b in balances
        if b.expense_count > 0 and b.balance < -epsilon
    ]
    if not candidates:
        return None

    return min(candidates, key=lambda b: (b.balance, b.name, b.id))


def get_balance_for_entity(
        entity_id: str,
        balances: Iterable[ParticipantBalance]
) -> Optional[ParticipantBalance]:
    """Get balance for a specific participant or family."""
    for balance in balances:
        if balance.id == entity_id:
            return balance
    return None


def _build_entities(
        participants: List[Participant],
        families: List[Family],
        tracking_mode: TrackingMode
) -> Dict[EntityId, Tuple[str, bool]]:
    """
    Build map of entity ID -> (name, is_family).

    In families mode every family is an entity, and so is every participant
    who does not belong to one of them.
    """
    entities: Dict[EntityId, Tuple[str, bool]] = {}

    if tracking_mode == TrackingMode.FAMILIES:
        family_ids = set()
        for family in families:
            entities[EntityId(family.id)] = (family.family_name, True)
            family_ids.add(family.id)

        for participant in participants:
            if participant.family_id not in family_ids:
                entities[EntityId(participant.id)] = (participant.name, False)
    else:
        for participant in participants:
            entities[EntityId(participant.id)] = (participant.name, False)

    return entities
