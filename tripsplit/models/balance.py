from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class ParticipantBalance(BaseModel):
    """
    Net position of one participant or family.

    balance = total_paid - total_share + net_settlements
    Positive balance = is owed money
    Negative balance = owes money
    """

    id: str
    name: str
    is_family: bool = False
    total_paid: Decimal = Decimal(0)
    total_share: Decimal = Decimal(0)
    net_settlements: Decimal = Decimal(0)
    balance: Decimal = Decimal(0)
    expense_count: int = 0


class BalanceCalculation(BaseModel):
    """Result of aggregating a trip's expenses and settlements."""

    balances: List[ParticipantBalance] = Field(default_factory=list)
    total_expenses: Decimal = Decimal(0)
    suggested_next_payer: Optional[ParticipantBalance] = None
    currency: str
    # Records left out of the calculation, by ID (or list position)
    skipped_expenses: List[str] = Field(default_factory=list)
    skipped_settlements: List[str] = Field(default_factory=list)
    missing_currencies: List[str] = Field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        """True if every expense and settlement was taken into account."""
        return not self.skipped_expenses and not self.skipped_settlements


class ExpenseSummary(BaseModel):
    """Expense statistics for a trip."""

    total_amount: Decimal = Decimal(0)
    expense_count: int = 0
    by_category: Dict[str, Decimal] = Field(default_factory=dict)
    by_payer: Dict[str, Decimal] = Field(default_factory=dict)
    currency: str
