from datetime import datetime
from decimal import Decimal
from typing import List
from pydantic import BaseModel, Field

from .common import BaseSchema


DEFAULT_PAYMENT_METHOD = "Card (Dummy)"
PAYMENT_METHODS: List[str] = [DEFAULT_PAYMENT_METHOD]


class DonationCreate(BaseModel):
    charity_name: str
    # Kept as text so the repository owns the parse/validate rules
    amount: str = Field(..., description="Donation amount in USD, e.g. '25.00'")
    payment_method: str = DEFAULT_PAYMENT_METHOD


class DonationRead(BaseSchema):
    id: str
    user_id: int
    charity_name: str
    amount: Decimal
    payment_method: str
    date: datetime
