from datetime import datetime, timedelta
from decimal import Decimal
from sqlmodel import select, Session, col
from models.debts import Debt
from models.enums import Currency, DebtStatus, PaymentType
from models.sales import Sale
from schemas.dashboard import CurrencyTotals, DashboardSummary


def _add(totals: CurrencyTotals, currency: Currency, value: Decimal) -> None:
    if currency == Currency.USD:
        totals.USD += value
    else:
        totals.LBP += value
    totals.count += 1


def get_summary(
    db: Session,
    day_start: datetime
) -> DashboardSummary:
    """Totals per currency for today's sales and the open debts."""
    today = day_start.date()
    summary = DashboardSummary()

    sales_today = db.exec(
        select(Sale).where(
            col(Sale.created_at) >= day_start,
            col(Sale.created_at) < day_start + timedelta(days=1),
        )
    ).all()
    for sale in sales_today:
        _add(summary.sales_today, sale.currency, sale.total_amount)
        if sale.payment_type == PaymentType.CASH:
            _add(summary.cash_today, sale.currency, sale.paid_amount)
        else:
            remaining = max(Decimal("0"), sale.total_amount - sale.paid_amount)
            _add(summary.debt_created_today, sale.currency, remaining)

    open_debts = db.exec(
        select(Debt).where(Debt.status != DebtStatus.PAID)
    ).all()
    for debt in open_debts:
        if debt.status == DebtStatus.PENDING:
            _add(summary.pending, debt.currency, debt.amount)
        elif debt.status == DebtStatus.OVERDUE:
            _add(summary.overdue, debt.currency, debt.amount)
        if debt.due_date == today:
            _add(summary.due_today, debt.currency, debt.amount)

    return summary
