"""Validators for input that is checked before it reaches the engine."""

import re
from decimal import Decimal, InvalidOperation
from typing import List, Optional, Tuple

from tripsplit.models import (
    ExpenseDistribution, FamiliesDistribution, IndividualsDistribution, TripSnapshot
)
from tripsplit.utils.constants import (
    ERR_EMPTY_DISTRIBUTION, ERR_INVALID_CURRENCY, ERR_INVALID_PERCENTAGE,
    ERR_INVALID_RATE, ERR_PERCENTAGE_RANGE, SplitMode
)

SPLIT_TOLERANCE = Decimal("0.01")


def _parse_decimal(text: str) -> Optional[Decimal]:
    # "1 234,5" is accepted as 1234.5
    text = text.strip().replace(" ", "").replace(",", ".")
    try:
        value = Decimal(text)
    except (InvalidOperation, ValueError):
        return None
    return value if value.is_finite() else None


def validate_percentage(text: str) -> Tuple[bool, Optional[Decimal], Optional[str]]:
    """
    Validate and parse percentage.

    Returns:
        Tuple of (is_valid, percentage, error_message)
    """
    percentage = _parse_decimal(text.replace("%", ""))
    if percentage is None:
        return False, None, ERR_INVALID_PERCENTAGE

    if percentage < 0 or percentage > 100:
        return False, None, ERR_PERCENTAGE_RANGE

    return True, percentage, None


def validate_currency_code(code: str) -> Tuple[bool, Optional[str], Optional[str]]:
    """
    Validate a three-letter currency code.

    Returns:
        Tuple of (is_valid, upper-cased code, error_message)
    """
    code = code.strip().upper()

    if not re.match(r"^[A-Z]{3}$", code):
        return False, None, ERR_INVALID_CURRENCY

    return True, code, None


def validate_exchange_rate(text: str) -> Tuple[bool, Optional[Decimal], Optional[str]]:
    """
    Validate an exchange rate (units of the default currency per unit).

    Returns:
        Tuple of (is_valid, rate, error_message)
    """
    rate = _parse_decimal(text)
    if rate is None or rate <= 0:
        return False, None, ERR_INVALID_RATE

    return True, rate, None


def is_valid_split_distribution(
        distribution: ExpenseDistribution,
        total_amount: Decimal
) -> Tuple[bool, Optional[str]]:
    """
    Validate that split distribution is correct.

    Percentages must add up to 100 and amounts to the expense total,
    within one cent.

    Args:
        distribution: Expense distribution
        total_amount: Total expense amount

    Returns:
        Tuple of (is_valid, error_message)
    """
    family_ids = [] if isinstance(distribution, IndividualsDistribution) else distribution.families
    participant_ids = [] if isinstance(distribution, FamiliesDistribution) else distribution.participants

    if not family_ids and not participant_ids:
        return False, ERR_EMPTY_DISTRIBUTION

    split_mode = SplitMode(distribution.split_mode)
    if split_mode == SplitMode.EQUAL:
        # For equal split, just need participants
        return True, None

    family_values = getattr(distribution, "family_splits", {})
    participant_values = getattr(distribution, "participant_splits", {})
    total = (
        sum((family_values.get(f, Decimal(0)) for f in dict.fromkeys(family_ids)), Decimal(0))
        + sum((participant_values.get(p, Decimal(0)) for p in dict.fromkeys(participant_ids)), Decimal(0))
    )

    if split_mode == SplitMode.PERCENTAGE:
        if abs(total - 100) > SPLIT_TOLERANCE:
            return False, f"Percentages must add up to 100% (currently {total}%)"
    else:
        if abs(total - total_amount) > SPLIT_TOLERANCE:
            return False, f"Amounts must add up to {total_amount} (currently {total})"

    return True, None


def check_snapshot(snapshot: TripSnapshot) -> List[str]:
    """
    Find business-rule problems in a trip snapshot.

    The engine takes such input literally (e.g. percentages that add up to
    90 charge only 90%), so callers report these before calculating.

    Returns:
        One message per problem; empty when everything checks out.
    """
    problems = []

    if snapshot.default_currency:
        is_valid, _, error = validate_currency_code(snapshot.default_currency)
        if not is_valid:
            problems.append(f"Trip currency {snapshot.default_currency}: {error}")

    for code, rate in snapshot.exchange_rates.items():
        is_valid, _, error = validate_exchange_rate(str(rate))
        if not is_valid:
            problems.append(f"Exchange rate {code}: {error}")

    for index, expense in enumerate(snapshot.expenses):
        label = expense.id or expense.description or f"#{index + 1}"

        is_valid, _, error = validate_currency_code(expense.currency)
        if not is_valid:
            problems.append(f"Expense {label}: {error}")

        is_valid, error = is_valid_split_distribution(expense.distribution, expense.amount)
        if not is_valid:
            problems.append(f"Expense {label}: {error}")

    return problems
