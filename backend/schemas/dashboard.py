from decimal import Decimal
from pydantic import BaseModel, Field


class CurrencyTotals(BaseModel):
    USD: Decimal = Decimal("0")
    LBP: Decimal = Decimal("0")
    count: int = 0


class DashboardSummary(BaseModel):
    cash_today: CurrencyTotals = Field(default_factory=CurrencyTotals)
    debt_created_today: CurrencyTotals = Field(default_factory=CurrencyTotals)
    sales_today: CurrencyTotals = Field(default_factory=CurrencyTotals)
    pending: CurrencyTotals = Field(default_factory=CurrencyTotals)
    overdue: CurrencyTotals = Field(default_factory=CurrencyTotals)
    due_today: CurrencyTotals = Field(default_factory=CurrencyTotals)
