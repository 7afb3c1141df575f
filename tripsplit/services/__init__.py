"""Services package."""

from tripsplit.services.currency_service import (
    MissingExchangeRateError,
    convert_currency,
    get_available_currencies,
)
from tripsplit.services.distribution_service import resolve_shares
from tripsplit.services.balance_service import (
    calculate_balances,
    find_suggested_payer,
    get_balance_for_entity,
)
from tripsplit.services.settlement_service import (
    calculate_optimal_settlement,
    get_transactions_for_entity,
    are_balances_settled,
    calculate_total_debt,
    calculate_total_credit,
)
from tripsplit.services.expense_service import summarize_expenses
from tripsplit.services.history_service import build_transaction_history
from tripsplit.services.calculation_service import CalculationService

__all__ = [
    "MissingExchangeRateError",
    "convert_currency",
    "get_available_currencies",
    "resolve_shares",
    "calculate_balances",
    "find_suggested_payer",
    "get_balance_for_entity",
    "calculate_optimal_settlement",
    "get_transactions_for_entity",
    "are_balances_settled",
    "calculate_total_debt",
    "calculate_total_credit",
    "summarize_expenses",
    "build_transaction_history",
    "CalculationService",
]
