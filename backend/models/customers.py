import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, func
from sqlmodel import SQLModel, Field, Index, Relationship
from typing import TYPE_CHECKING

from models.enums import Currency

if TYPE_CHECKING:
    from models.debts import Debt


class Customer(SQLModel, table=True):
    __tablename__ = "customers"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        sa_column_kwargs={"nullable": False}
    )
    name: str = Field(max_length=100, nullable=False)
    phone: str | None = Field(default=None, max_length=30, nullable=True)  # free-form, normalized on send
    notes: str | None = Field(default=None, nullable=True)
    preferred_currency: Currency = Field(default=Currency.USD, nullable=False)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    )

    __table_args__ = (
        Index("idx_customer_name", "name"),
    )

    # Relationships
    debts: list["Debt"] = Relationship(back_populates="customer")
