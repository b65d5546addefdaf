import uuid
from datetime import datetime, timezone
from decimal import Decimal
from sqlalchemy import Column, DateTime, func
from sqlmodel import SQLModel, Field, Relationship
from typing import TYPE_CHECKING, Optional

from models.enums import Currency, PaymentType

if TYPE_CHECKING:
    from models.customers import Customer
    from models.debts import Debt


class Sale(SQLModel, table=True):
    __tablename__ = "sales"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        sa_column_kwargs={"nullable": False}
    )
    item_name: str = Field(max_length=200, nullable=False)
    currency: Currency = Field(default=Currency.USD, nullable=False)
    total_amount: Decimal = Field(max_digits=14, decimal_places=2, nullable=False)
    paid_amount: Decimal = Field(default=Decimal("0"), max_digits=14, decimal_places=2, nullable=False)
    payment_type: PaymentType = Field(default=PaymentType.CASH, nullable=False)
    customer_id: uuid.UUID | None = Field(foreign_key="customers.id", default=None, nullable=True)
    debt_id: uuid.UUID | None = Field(foreign_key="debts.id", default=None, nullable=True)  # generated for DEBT sales
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    )

    # Relationships
    customer: Optional["Customer"] = Relationship()
    debt: Optional["Debt"] = Relationship()
