import uuid
from datetime import date, datetime, timezone
from decimal import Decimal
from sqlalchemy import Column, DateTime, func
from sqlmodel import SQLModel, Field, Index, Relationship
from typing import TYPE_CHECKING, Optional

from models.enums import Currency, DebtStatus, DebtType

if TYPE_CHECKING:
    from models.customers import Customer


class Debt(SQLModel, table=True):
    __tablename__ = "debts"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        sa_column_kwargs={"nullable": False}
    )
    customer_id: uuid.UUID = Field(foreign_key="customers.id", nullable=False)
    type: DebtType = Field(default=DebtType.OTHER, nullable=False)
    currency: Currency = Field(default=Currency.USD, nullable=False)
    amount: Decimal = Field(default=Decimal("0"), max_digits=14, decimal_places=2, nullable=False)
    due_date: date = Field(nullable=False)
    status: DebtStatus = Field(default=DebtStatus.PENDING, nullable=False)
    notes: str | None = Field(default=None, nullable=True)
    # Reminder bookkeeping, written only by the reminder job
    reminder_last_sent_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True)
    )
    reminder_count: int = Field(default=0, nullable=False)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    )

    __table_args__ = (
        Index("idx_debt_status_due_date", "status", "due_date"),
    )

    # Relationships
    customer: Optional["Customer"] = Relationship(back_populates="debts")
