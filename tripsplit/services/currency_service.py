"""
Currency conversion into a trip's default currency.

Exchange rates are supplied by the caller as a mapping of currency code to
the number of default-currency units one unit of that currency is worth:
with a EUR trip, {"USD": 0.9} means 1 USD = 0.9 EUR.
"""
from decimal import Decimal, InvalidOperation
from typing import List, Mapping, Optional, Union

RateValue = Union[Decimal, int, float, str]


class MissingExchangeRateError(ValueError):
    """No usable exchange rate for a conversion that needs one."""

    def __init__(self, from_currency: str, to_currency: str):
        self.from_currency = from_currency
        self.to_currency = to_currency
        super().__init__(
            f"No exchange rate from {from_currency} to {to_currency}"
        )


def _to_decimal(value: RateValue) -> Optional[Decimal]:
    if isinstance(value, Decimal):
        return value
    try:
        # str() keeps floats like 0.9 exact
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None


def get_rate(
    currency: str,
    exchange_rates: Optional[Mapping[str, RateValue]],
    to_currency: str = "default currency"
) -> Decimal:
    """
    Get the rate for one unit of currency in the default currency.

    Raises:
        MissingExchangeRateError: if the rate is absent, not a number or
            not positive
    """
    rates = {
        code.strip().upper(): value
        for code, value in (exchange_rates or {}).items()
    }
    currency_upper = currency.upper()

    raw = rates.get(currency_upper)

    rate = _to_decimal(raw) if raw is not None else None
    if rate is None or not rate.is_finite() or rate <= 0:
        raise MissingExchangeRateError(currency_upper, to_currency)

    return rate


def convert_currency(
    amount: Decimal,
    from_currency: str,
    to_currency: str,
    exchange_rates: Optional[Mapping[str, RateValue]] = None
) -> Decimal:
    """
    Convert amount from one currency to the default currency.

    Args:
        amount: Amount in from_currency
        from_currency: Source currency code
        to_currency: Target (default) currency code
        exchange_rates: Currency code -> units of to_currency per unit

    Returns:
        Amount in to_currency

    Raises:
        MissingExchangeRateError: if the conversion needs a rate that is
            not available. A 1:1 rate is never assumed.
    """
    from_upper = from_currency.upper()
    to_upper = to_currency.upper()

    if from_upper == to_upper:
        return amount

    return amount * get_rate(from_upper, exchange_rates, to_upper)


def get_available_currencies(
    default_currency: str,
    exchange_rates: Optional[Mapping[str, RateValue]] = None
) -> List[str]:
    """Default currency first, then every currency with a rate."""
    default_upper = default_currency.upper()
    currencies = [default_upper]

    for code in (exchange_rates or {}):
        code_upper = code.upper()
        if code_upper not in currencies:
            currencies.append(code_upper)

    return currencies
