from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Settlement(BaseModel):
    """A recorded payment from one participant/family to another."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    from_participant_id: str  # Who paid
    to_participant_id: str    # Who received
    amount: Decimal = Field(ge=0)
    currency: str
    settlement_date: Optional[date] = None
    note: Optional[str] = None

    @field_validator("currency")
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        return v.strip().upper()


class SettlementTransaction(BaseModel):
    """A single payment in a settlement plan."""

    from_id: str
    from_name: str
    to_id: str
    to_name: str
    amount: Decimal
    is_from_family: bool = False
    is_to_family: bool = False


class OptimalSettlementPlan(BaseModel):
    """Minimal set of payments that brings every balance to zero."""

    transactions: List[SettlementTransaction] = Field(default_factory=list)
    total_transactions: int = 0
    currency: str
