"""Service for building one participant's transaction history."""

from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Union

from tripsplit.models import Expense, Family, Participant, Settlement, TransactionItem
from tripsplit.services.distribution_service import (
    resolve_participant_entity, resolve_shares
)
from tripsplit.utils.constants import (
    MSG_DEFAULT_SETTLEMENT_NOTE, MSG_UNKNOWN_PARTICIPANT, HistoryRole, TrackingMode
)


def build_transaction_history(
        expenses: Iterable[Expense],
        settlements: Iterable[Settlement],
        participants: Iterable[Participant],
        families: Iterable[Family],
        my_participant_id: str,
        tracking_mode: Union[TrackingMode, str]
) -> List[TransactionItem]:
    """
    Merge expenses and settlements into one feed for a participant.

    An expense is listed when the participant paid it (you_paid) or when
    their entity has a non-zero share of it (your_share). A settlement is
    listed when their entity sent it (you_settled) or received it
    (you_received). In families mode the entity is the participant's
    family, so settlements made by any family member show up. Amounts are
    in the record's own currency; nothing is converted.

    Args:
        expenses: Trip expenses
        settlements: Recorded settlements
        participants: Trip participants
        families: Trip families
        my_participant_id: Participant whose history is built
        tracking_mode: 'individuals' or 'families'

    Returns:
        Items sorted newest first; undated items come last.
    """
    participants = list(participants)
    families = list(families)
    participants_by_id = {p.id: p for p in participants}
    families_by_id = {f.id: f for f in families}

    names: Dict[str, str] = {f.id: f.family_name for f in families}
    names.update((p.id, p.name) for p in participants)

    my_entity_id = resolve_participant_entity(
        my_participant_id, participants_by_id, families_by_id, tracking_mode
    )

    items: List[TransactionItem] = []

    for index, expense in enumerate(expenses):
        is_payer = expense.paid_by == my_participant_id
        shares = resolve_shares(expense, participants, families, tracking_mode)
        my_share = shares.get(my_entity_id, Decimal(0))

        if not is_payer and my_share == 0:
            continue

        item_id = f"expense-{expense.id if expense.id is not None else index}"

        if is_payer:
            items.append(TransactionItem(
                id=item_id,
                type="expense",
                entry_date=expense.expense_date,
                description=expense.description,
                amount=expense.amount,
                currency=expense.currency,
                role=HistoryRole.YOU_PAID,
                role_amount=expense.amount,
                my_share=my_share
            ))
        else:
            items.append(TransactionItem(
                id=item_id,
                type="expense",
                entry_date=expense.expense_date,
                description=expense.description,
                amount=expense.amount,
                currency=expense.currency,
                role=HistoryRole.YOUR_SHARE,
                role_amount=my_share,
                payer_name=names.get(expense.paid_by, MSG_UNKNOWN_PARTICIPANT)
            ))

    for index, settlement in enumerate(settlements):
        from_id = resolve_participant_entity(
            settlement.from_participant_id, participants_by_id, families_by_id, tracking_mode
        )
        to_id = resolve_participant_entity(
            settlement.to_participant_id, participants_by_id, families_by_id, tracking_mode
        )
        is_from = from_id == my_entity_id
        is_to = to_id == my_entity_id

        # Inside one entity nothing changes hands
        if is_from == is_to:
            continue

        item_id = f"settlement-{settlement.id if settlement.id is not None else index}"
        description = settlement.note or MSG_DEFAULT_SETTLEMENT_NOTE

        if is_from:
            items.append(TransactionItem(
                id=item_id,
                type="settlement",
                entry_date=settlement.settlement_date,
                description=description,
                amount=settlement.amount,
                currency=settlement.currency,
                role=HistoryRole.YOU_SETTLED,
                role_amount=settlement.amount,
                recipient_name=names.get(settlement.to_participant_id, MSG_UNKNOWN_PARTICIPANT)
            ))
        else:
            items.append(TransactionItem(
                id=item_id,
                type="settlement",
                entry_date=settlement.settlement_date,
                description=description,
                amount=settlement.amount,
                currency=settlement.currency,
                role=HistoryRole.YOU_RECEIVED,
                role_amount=settlement.amount,
                payer_name=names.get(settlement.from_participant_id, MSG_UNKNOWN_PARTICIPANT)
            ))

    # Newest first; sorted() is stable, so same-day items keep their order
    return sorted(items, key=lambda item: item.entry_date or date.min, reverse=True)
