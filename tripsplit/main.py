"""Main entry point: settle up a trip exported as JSON."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from tripsplit.config.settings import settings
from tripsplit.models import TripSnapshot
from tripsplit.services.calculation_service import CalculationService, build_debt_report
from tripsplit.services.currency_service import MissingExchangeRateError
from tripsplit.services.expense_service import summarize_expenses
from tripsplit.services.settlement_service import get_transactions_for_entity
from tripsplit.utils.formatters import (
    format_debt_calculation, format_expense_summary,
    format_settlement_plan, format_settlement_transaction
)
from tripsplit.utils.validators import check_snapshot

logger = logging.getLogger(__name__)


def configure_logging():
    """Configure logging from settings."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tripsplit",
        description="Calculate balances and the minimal settlement plan for a trip"
    )
    parser.add_argument("snapshot", type=Path, help="Trip snapshot JSON file")
    parser.add_argument(
        "--entity",
        help=(
            "Only show payments involving this participant or family ID; "
            "in families mode a family member's ID stands for their family"
        )
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Also show expense statistics"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on a missing exchange rate instead of skipping the record"
    )
    return parser


def load_snapshot(path: Path) -> TripSnapshot:
    """Read and validate a trip snapshot."""
    return TripSnapshot.model_validate_json(path.read_text(encoding="utf-8"))


def main(argv: Optional[List[str]] = None) -> int:
    """Run the calculation and print the result. Returns the exit code."""
    args = build_parser().parse_args(argv)
    configure_logging()

    try:
        snapshot = load_snapshot(args.snapshot)
    except OSError as e:
        logger.error(f"Could not read {args.snapshot}: {e}")
        return 1
    except ValidationError as e:
        logger.error(f"Invalid trip snapshot {args.snapshot}: {e}")
        return 1

    for problem in check_snapshot(snapshot):
        logger.warning(problem)

    config = settings
    if args.strict:
        config = settings.model_copy(update={"strict_exchange_rates": True})

    service = CalculationService(config)
    try:
        result = service.calculate(snapshot)
    except MissingExchangeRateError as e:
        logger.error(f"Calculation failed: {e}")
        return 1

    currency = result.plan.currency

    if args.entity:
        entity_id = service.resolve_entity(snapshot, args.entity)
        transactions = get_transactions_for_entity(result.plan, entity_id)
        if not transactions:
            print("Nothing to pay or receive.")
        for transaction in transactions:
            print(format_settlement_transaction(transaction, currency))
    else:
        report = build_debt_report(result.calculation, result.plan.transactions)
        print(format_debt_calculation(report, currency, config.settled_epsilon))
        print()
        print(format_settlement_plan(result.plan))

    if args.summary:
        summary = summarize_expenses(
            snapshot.expenses,
            snapshot.participants,
            currency,
            snapshot.exchange_rates
        )
        print()
        print(format_expense_summary(summary))

    if result.calculation.missing_currencies:
        logger.warning(
            f"Missing exchange rates for: {', '.join(result.calculation.missing_currencies)}"
        )

    return 0


if __name__ == "__main__":
    sys.exit(main())
