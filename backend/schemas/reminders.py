import uuid
from datetime import date
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field

from models.enums import Currency, DebtType


class ReminderMessage(BaseModel):
    text: str
    wa_link: str


class ReminderCandidate(BaseModel):
    """A debt joined with the customer fields needed to remind them."""
    debt_id: uuid.UUID
    customer_name: str
    phone: str
    amount: Decimal
    currency: Currency
    due_date: date
    type: DebtType
    reminder_count: int = 0


class DueDebtSelection(BaseModel):
    found: int
    candidates: list[ReminderCandidate]
    skipped: list[uuid.UUID] = Field(default_factory=list)  # no usable phone


class ReminderFailure(BaseModel):
    id: uuid.UUID
    err: str


class DispatchResult(BaseModel):
    found: int
    sent: int = 0
    failures: list[ReminderFailure] = Field(default_factory=list)


class ReminderRunResponse(BaseModel):
    ok: bool = True
    today: Optional[date] = None
    found: Optional[int] = None
    sent: Optional[int] = None
    failures: Optional[list[ReminderFailure]] = None
    error: Optional[str] = None
