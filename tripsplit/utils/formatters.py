"""Formatters for displaying balances and settlement plans."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List

from tripsplit.models import ExpenseSummary, OptimalSettlementPlan, SettlementTransaction
from tripsplit.utils.constants import (
    CURRENCY_SYMBOLS, MSG_ALL_SETTLED, MSG_NO_TRANSACTIONS, SETTLED_EPSILON,
    BalanceStatus, get_minor_unit
)


def get_balance_status(
        balance: Decimal,
        epsilon: Decimal = SETTLED_EPSILON
) -> BalanceStatus:
    """Classify a balance the same way the settlement plan does."""
    if balance > epsilon:
        return BalanceStatus.CREDITOR
    if balance < -epsilon:
        return BalanceStatus.DEBTOR
    return BalanceStatus.SETTLED


def format_amount(amount: Decimal, currency: str = "EUR") -> str:
    """Format amount with currency, rounded to the minor unit."""
    code = currency.upper()
    minor_unit = get_minor_unit(code)
    value = Decimal(amount).quantize(minor_unit, rounding=ROUND_HALF_UP)
    places = -minor_unit.as_tuple().exponent

    number = f"{abs(value):,.{places}f}"
    sign = "-" if value < 0 else ""

    symbol = CURRENCY_SYMBOLS.get(code)
    if symbol:
        return f"{sign}{symbol}{number}"
    return f"{sign}{number} {code}"


def format_balance(
        balance: Decimal,
        currency: str = "EUR",
        epsilon: Decimal = SETTLED_EPSILON
) -> str:
    """Format balance as a signed string: + is owed, - owes."""
    status = get_balance_status(balance, epsilon)
    formatted = format_amount(abs(balance), currency)

    if status == BalanceStatus.CREDITOR:
        return f"+{formatted}"
    elif status == BalanceStatus.DEBTOR:
        return f"-{formatted}"
    return format_amount(Decimal(0), currency)


def format_settlement_transaction(
        transaction: SettlementTransaction,
        currency: str = "EUR"
) -> str:
    """Format a settlement transaction as a readable string."""
    amount = format_amount(transaction.amount, currency)
    return f"{transaction.from_name} pays {transaction.to_name}: {amount}"


def format_settlement_plan(plan: OptimalSettlementPlan) -> str:
    """Format all transactions of a plan, one per line."""
    if not plan.transactions:
        return MSG_NO_TRANSACTIONS

    lines = [f"Payments needed: {plan.total_transactions}"]
    for i, transaction in enumerate(plan.transactions, 1):
        lines.append(f"{i}. {format_settlement_transaction(transaction, plan.currency)}")

    return "\n".join(lines)


def format_debt_calculation(
        debts: Dict[str, Dict],
        currency: str = "EUR",
        epsilon: Decimal = SETTLED_EPSILON
) -> str:
    """Format debt calculation results."""
    message = "Debt calculation\n\n"

    # Separate into categories
    debtors: List[Dict] = []
    creditors: List[Dict] = []
    balanced: List[Dict] = []

    for debt_info in debts.values():
        status = get_balance_status(debt_info["balance"], epsilon)
        if status == BalanceStatus.DEBTOR:
            debtors.append(debt_info)
        elif status == BalanceStatus.CREDITOR:
            creditors.append(debt_info)
        else:
            balanced.append(debt_info)

    if not debtors and not creditors:
        return message + MSG_ALL_SETTLED

    # Show who owes
    if debtors:
        message += "Owes:\n"
        for debt_info in debtors:
            message += f"\n{debt_info['name']} (total: {format_amount(abs(debt_info['balance']), currency)})\n"
            for debt in debt_info["debts"]:
                message += f"  -> {debt['to_name']}: {format_amount(debt['amount'], currency)}\n"
        message += "\n"

    # Show who is owed
    if creditors:
        message += "Is owed:\n"
        for debt_info in creditors:
            message += f"\n{debt_info['name']} (total: {format_amount(debt_info['balance'], currency)})\n"
            for credit in debt_info["credits"]:
                message += f"  <- {credit['from_name']}: {format_amount(credit['amount'], currency)}\n"
        message += "\n"

    # Show balanced
    if balanced:
        message += "Settled:\n"
        for debt_info in balanced:
            message += f"  * {debt_info['name']}\n"

    return message.rstrip("\n")


def format_expense_summary(summary: ExpenseSummary) -> str:
    """Format expense summary statistics."""
    currency = summary.currency
    total = summary.total_amount

    message = "Expense summary\n\n"
    message += f"Total spent: {format_amount(total, currency)}\n"
    message += f"Number of expenses: {summary.expense_count}\n"

    if summary.by_category:
        message += "\nBy category:\n"
        for category, amount in sorted(
                summary.by_category.items(),
                key=lambda x: (-x[1], x[0])
        ):
            percentage = (amount / total * 100) if total > 0 else 0
            message += f"  * {category}: {format_amount(amount, currency)} ({percentage:.1f}%)\n"

    if summary.by_payer:
        message += "\nWho paid:\n"
        for payer, amount in sorted(
                summary.by_payer.items(),
                key=lambda x: (-x[1], x[0])
        ):
            percentage = (amount / total * 100) if total > 0 else 0
            message += f"  * {payer}: {format_amount(amount, currency)} ({percentage:.1f}%)\n"

    return message.rstrip("\n")
