from datetime import date
from decimal import Decimal
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tripsplit.utils.constants import SplitMode


class IndividualsDistribution(BaseModel):
    """Expense shared by listed participants."""

    model_config = ConfigDict(frozen=True)

    type: Literal["individuals"] = "individuals"
    participants: List[str] = Field(default_factory=list)
    split_mode: SplitMode = SplitMode.EQUAL
    # participant_id -> percentage or amount, depending on split_mode
    participant_splits: Dict[str, Decimal] = Field(default_factory=dict)


class FamiliesDistribution(BaseModel):
    """Expense shared by listed families."""

    model_config = ConfigDict(frozen=True)

    type: Literal["families"] = "families"
    families: List[str] = Field(default_factory=list)
    split_mode: SplitMode = SplitMode.EQUAL
    family_splits: Dict[str, Decimal] = Field(default_factory=dict)
    account_for_family_size: bool = False


class MixedDistribution(BaseModel):
    """Expense shared by some families and some individuals."""

    model_config = ConfigDict(frozen=True)

    type: Literal["mixed"] = "mixed"
    families: List[str] = Field(default_factory=list)
    participants: List[str] = Field(default_factory=list)
    split_mode: SplitMode = SplitMode.EQUAL
    family_splits: Dict[str, Decimal] = Field(default_factory=dict)
    participant_splits: Dict[str, Decimal] = Field(default_factory=dict)
    account_for_family_size: bool = False


ExpenseDistribution = Annotated[
    Union[IndividualsDistribution, FamiliesDistribution, MixedDistribution],
    Field(discriminator="type"),
]


class Expense(BaseModel):
    """Expense entry for a trip."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    description: str = ""
    amount: Decimal = Field(ge=0)
    currency: str
    paid_by: str  # participant ID
    distribution: ExpenseDistribution
    category: Optional[str] = None
    expense_date: Optional[date] = None

    @field_validator("currency")
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        return v.strip().upper()

    def __repr__(self) -> str:
        return f"<Expense(id={self.id!r}, amount={self.amount}, currency={self.currency!r})>"
