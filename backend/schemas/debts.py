import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field

from models.enums import Currency, DebtStatus, DebtType


class DebtCreate(BaseModel):
    customer_id: uuid.UUID
    type: DebtType = DebtType.OTHER
    currency: Currency = Currency.USD
    amount: Decimal = Field(..., gt=0, max_digits=14, decimal_places=2)
    due_date: date
    notes: Optional[str] = None


class DebtStatusUpdate(BaseModel):
    status: DebtStatus


class DebtResponse(BaseModel):
    id: uuid.UUID
    customer_id: uuid.UUID
    type: DebtType
    currency: Currency
    amount: Decimal
    due_date: date
    status: DebtStatus
    notes: Optional[str]
    reminder_last_sent_at: Optional[datetime]
    reminder_count: int
    created_at: datetime

    class Config:
        from_attributes = True
