"""Service for resolving each entity's share of a single expense."""

from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Tuple, Union

from tripsplit.models import (
    EntityId, Expense, Family, Participant,
    IndividualsDistribution, FamiliesDistribution, MixedDistribution
)
from tripsplit.utils.constants import SplitMode, TrackingMode

HUNDRED = Decimal(100)


def resolve_participant_entity(
        participant_id: str,
        participants_by_id: Mapping[str, Participant],
        families_by_id: Mapping[str, Family],
        tracking_mode: Union[TrackingMode, str]
) -> EntityId:
    """
    Map a participant to the entity that carries their balance.

    In families mode a participant that belongs to a known family is
    represented by the family; everybody else stands for themselves.
    """
    if TrackingMode(tracking_mode) == TrackingMode.FAMILIES:
        participant = participants_by_id.get(participant_id)
        if participant and participant.family_id in families_by_id:
            return EntityId(participant.family_id)

    return EntityId(participant_id)


def resolve_shares(
        expense: Expense,
        participants: Iterable[Participant],
        families: Iterable[Family],
        tracking_mode: Union[TrackingMode, str]
) -> Dict[EntityId, Decimal]:
    """
    Calculate how much each entity owes for one expense.

    Shares are computed on the expense's own amount and currency. Input is
    taken literally: percentages that do not add up to 100 and amounts that
    do not add up to the expense total are not corrected.

    Args:
        expense: Expense to split
        participants: Trip participants
        families: Trip families
        tracking_mode: 'individuals' or 'families'

    Returns:
        Dict of entity ID -> share. Entities the distribution does not
        mention are absent; an empty distribution gives an empty dict.
    """
    participants_by_id = {p.id: p for p in participants}
    families_by_id = {f.id: f for f in families}

    units = _distribution_units(expense.distribution)
    if not units:
        return {}

    split_mode = SplitMode(expense.distribution.split_mode)

    if split_mode == SplitMode.EQUAL:
        raw_shares = _equal_shares(
            expense.amount,
            units,
            families_by_id,
            _accounts_for_family_size(expense.distribution)
        )
    elif split_mode == SplitMode.PERCENTAGE:
        raw_shares = [
            expense.amount * value / HUNDRED
            for _, _, value in units
        ]
    else:
        raw_shares = [value for _, _, value in units]

    shares: Dict[EntityId, Decimal] = {}

    for (is_family, unit_id, _), share in zip(units, raw_shares):
        if is_family:
            entity_id = EntityId(unit_id)
        else:
            entity_id = resolve_participant_entity(
                unit_id, participants_by_id, families_by_id, tracking_mode
            )

        shares[entity_id] = shares.get(entity_id, Decimal(0)) + share

    return shares


def _distribution_units(distribution) -> List[Tuple[bool, str, Decimal]]:
    """
    Flatten a distribution into (is_family, id, declared_value) units.

    Families come first, then participants; duplicate IDs count once.
    The declared value is 0 where none was given.
    """
    family_ids: List[str] = []
    participant_ids: List[str] = []
    family_values: Mapping[str, Decimal] = {}
    participant_values: Mapping[str, Decimal] = {}

    if isinstance(distribution, IndividualsDistribution):
        participant_ids = distribution.participants
        participant_values = distribution.participant_splits
    elif isinstance(distribution, FamiliesDistribution):
        family_ids = distribution.families
        family_values = distribution.family_splits
    elif isinstance(distribution, MixedDistribution):
        family_ids = distribution.families
        participant_ids = distribution.participants
        family_values = distribution.family_splits
        participant_values = distribution.participant_splits

    units = [
        (True, family_id, family_values.get(family_id, Decimal(0)))
        for family_id in dict.fromkeys(family_ids)
    ]
    units.extend(
        (False, participant_id, participant_values.get(participant_id, Decimal(0)))
        for participant_id in dict.fromkeys(participant_ids)
    )
    return units


def _accounts_for_family_size(distribution) -> bool:
    return bool(getattr(distribution, "account_for_family_size", False))


def _equal_shares(
        amount: Decimal,
        units: List[Tuple[bool, str, Decimal]],
        families_by_id: Mapping[str, Family],
        weighted: bool
) -> List[Decimal]:
    """
    Split amount equally between units.

    When weighted, a family counts as many units as it has members and a
    standalone participant counts as one.
    """
    weights = []
    for is_family, unit_id, _ in units:
        family = families_by_id.get(unit_id) if is_family else None
        weights.append(family.member_count if weighted and family else 1)

    total_weight = sum(weights)
    return [amount * weight / total_weight for weight in weights]
