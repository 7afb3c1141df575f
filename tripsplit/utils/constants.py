"""Constants used throughout the engine."""

from decimal import Decimal
from enum import Enum


class TrackingMode(str, Enum):
    """Whether balances are kept per person or per family."""
    INDIVIDUALS = "individuals"
    FAMILIES = "families"


class SplitMode(str, Enum):
    """How an expense is split."""
    EQUAL = "equal"            # Split equally (optionally weighted by family size)
    PERCENTAGE = "percentage"  # Declared percentage per entity
    AMOUNT = "amount"          # Declared amount per entity


class BalanceStatus(str, Enum):
    """Three-way classification of a balance."""
    CREDITOR = "creditor"  # Is owed money
    DEBTOR = "debtor"      # Owes money
    SETTLED = "settled"


class HistoryRole(str, Enum):
    """What the viewing participant did in a history entry."""
    YOU_PAID = "you_paid"
    YOUR_SHARE = "your_share"
    YOU_SETTLED = "you_settled"
    YOU_RECEIVED = "you_received"


# Balances within this distance of zero are settled
SETTLED_EPSILON = Decimal("0.01")

DEFAULT_CURRENCY = "EUR"

# Decimal places of the minor unit, for currencies that differ from 2
CURRENCY_DECIMALS = {
    "JPY": 0,
    "KRW": 0,
    "VND": 0,
    "CLP": 0,
    "ISK": 0,
    "HUF": 0,
    "BHD": 3,
    "KWD": 3,
    "OMR": 3,
    "TND": 3,
}

CURRENCY_SYMBOLS = {
    "EUR": "€",
    "USD": "$",
    "GBP": "£",
    "JPY": "¥",
    "KRW": "₩",
    "RUB": "₽",
    "CHF": "CHF ",
    "INR": "₹",
}


def get_minor_unit(currency: str) -> Decimal:
    """Smallest representable amount of a currency, e.g. Decimal('0.01')."""
    places = CURRENCY_DECIMALS.get(currency.upper(), 2)
    return Decimal(1).scaleb(-places)


# Messages
MSG_ALL_SETTLED = "All settled up!"
MSG_NO_TRANSACTIONS = "No payments needed."
MSG_DEFAULT_SETTLEMENT_NOTE = "Payment"
MSG_UNKNOWN_PARTICIPANT = "Unknown"

# Error messages
ERR_INVALID_PERCENTAGE = "Invalid percentage"
ERR_PERCENTAGE_RANGE = "Percentage must be between 0 and 100"
ERR_INVALID_CURRENCY = "Currency must be a three-letter ISO code, e.g. EUR"
ERR_INVALID_RATE = "Exchange rate must be a number greater than zero"
ERR_EMPTY_DISTRIBUTION = "At least one participant or family must share the expense"
