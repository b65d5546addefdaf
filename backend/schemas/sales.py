import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, model_validator

from models.enums import Currency, DebtType, PaymentType


class SaleCreate(BaseModel):
    item_name: str = Field(..., max_length=200)
    currency: Currency = Currency.USD
    total_amount: Decimal = Field(..., gt=0, max_digits=14, decimal_places=2)
    paid_amount: Decimal = Field(default=Decimal("0"), ge=0, max_digits=14, decimal_places=2)
    payment_type: PaymentType = PaymentType.CASH
    customer_id: Optional[uuid.UUID] = None
    # Only used for DEBT sales
    debt_type: DebtType = DebtType.MOBILE
    due_date: Optional[date] = None

    @model_validator(mode="after")
    def check_amounts(self) -> "SaleCreate":
        self.item_name = self.item_name.strip()
        if not self.item_name:
            raise ValueError("Item name required")
        if self.paid_amount > self.total_amount:
            raise ValueError("Paid can't be more than total")
        if self.payment_type == PaymentType.DEBT:
            if self.customer_id is None:
                raise ValueError("Choose customer for a debt sale")
            if self.due_date is None:
                raise ValueError("Due date required for a debt sale")
        return self


class SaleResponse(BaseModel):
    id: uuid.UUID
    item_name: str
    currency: Currency
    total_amount: Decimal
    paid_amount: Decimal
    payment_type: PaymentType
    customer_id: Optional[uuid.UUID]
    debt_id: Optional[uuid.UUID]
    created_at: datetime

    class Config:
        from_attributes = True
