from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tripsplit.models.balance import BalanceCalculation
from tripsplit.models.expense import Expense
from tripsplit.models.participant import Family, Participant
from tripsplit.models.settlement import OptimalSettlementPlan, Settlement
from tripsplit.utils.constants import TrackingMode


class TripSnapshot(BaseModel):
    """Consistent snapshot of everything needed for one calculation."""

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    tracking_mode: TrackingMode = TrackingMode.INDIVIDUALS
    default_currency: Optional[str] = None
    # currency -> units of default_currency per one unit of that currency
    exchange_rates: Dict[str, Decimal] = Field(default_factory=dict)
    participants: List[Participant] = Field(default_factory=list)
    families: List[Family] = Field(default_factory=list)
    expenses: List[Expense] = Field(default_factory=list)
    settlements: List[Settlement] = Field(default_factory=list)

    @field_validator("default_currency")
    @classmethod
    def normalize_currency(cls, v: Optional[str]) -> Optional[str]:
        return v.strip().upper() if v else None

    @field_validator("exchange_rates")
    @classmethod
    def normalize_rate_keys(cls, v: Dict[str, Decimal]) -> Dict[str, Decimal]:
        return {code.strip().upper(): rate for code, rate in v.items()}


class TripSettlement(BaseModel):
    """Balances and the payment plan that settles them."""

    calculation: BalanceCalculation
    plan: OptimalSettlementPlan
