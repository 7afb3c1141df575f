from datetime import date
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel

from tripsplit.utils.constants import HistoryRole


class TransactionItem(BaseModel):
    """One expense or settlement as seen by a single participant."""

    id: str
    type: Literal["expense", "settlement"]
    entry_date: Optional[date] = None
    description: str
    amount: Decimal
    currency: str
    role: HistoryRole
    role_amount: Decimal  # what the role refers to: amount paid, share, payment
    my_share: Optional[Decimal] = None  # only for expenses the viewer paid
    payer_name: Optional[str] = None
    recipient_name: Optional[str] = None
