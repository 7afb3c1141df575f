"""Service for expense statistics."""

import logging
from decimal import Decimal
from typing import Iterable, Mapping, Optional

from tripsplit.models import Expense, ExpenseSummary, Participant
from tripsplit.services.currency_service import (
    MissingExchangeRateError, RateValue, convert_currency
)
from tripsplit.utils.constants import DEFAULT_CURRENCY

logger = logging.getLogger(__name__)

UNCATEGORIZED = "Uncategorized"


def summarize_expenses(
        expenses: Iterable[Expense],
        participants: Iterable[Participant],
        default_currency: str = DEFAULT_CURRENCY,
        exchange_rates: Optional[Mapping[str, RateValue]] = None
) -> ExpenseSummary:
    """
    Get expense summary for a trip.

    Returns:
        ExpenseSummary with:
        - total_amount: Total spent, in default_currency
        - expense_count: Number of expenses counted
        - by_category: Breakdown by category
        - by_payer: Breakdown by who paid (participant name)
    """
    currency = default_currency.upper()
    names = {p.id: p.name for p in participants}

    total_amount = Decimal(0)
    expense_count = 0
    by_category = {}
    by_payer = {}

    for expense in expenses:
        try:
            amount = convert_currency(
                expense.amount, expense.currency, currency, exchange_rates
            )
        except MissingExchangeRateError as e:
            logger.warning(f"Expense {expense.id or expense.description!r} left out of summary: {e}")
            continue

        total_amount += amount
        expense_count += 1

        # By category
        category = expense.category or UNCATEGORIZED
        if category not in by_category:
            by_category[category] = Decimal(0)
        by_category[category] += amount

        # By payer
        payer_name = names.get(expense.paid_by, expense.paid_by)
        if payer_name not in by_payer:
            by_payer[payer_name] = Decimal(0)
        by_payer[payer_name] += amount

    return ExpenseSummary(
        total_amount=total_amount,
        expense_count=expense_count,
        by_category=by_category,
        by_payer=by_payer,
        currency=currency
    )
