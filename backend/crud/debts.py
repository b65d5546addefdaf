import uuid
from datetime import date
from typing import Literal, Optional
from sqlmodel import select, Session, col
from models.debts import Debt
from models.enums import DebtStatus
from schemas.debts import DebtCreate

DebtFilter = Literal["ALL", "PENDING", "OVERDUE", "PAID", "DUE_TODAY"]


class InvalidStatusTransition(ValueError):
    pass


def create_debt(
    db: Session,
    debt_data: DebtCreate,
    commit: bool = True
) -> Debt:
    """Create a pending debt."""
    if debt_data.amount < 0:
        raise ValueError("Debt amount must be >= 0")

    debt = Debt(
        customer_id=debt_data.customer_id,
        type=debt_data.type,
        currency=debt_data.currency,
        amount=debt_data.amount,
        due_date=debt_data.due_date,
        status=DebtStatus.PENDING,
        notes=(debt_data.notes or "").strip() or None,
    )
    db.add(debt)
    if commit:
        db.commit()
        db.refresh(debt)
    else:
        db.flush()

    return debt


def get_debt_by_id(
    db: Session,
    debt_id: uuid.UUID
) -> Debt | None:
    """Get debt by ID."""
    return db.get(Debt, debt_id)


def list_debts(
    db: Session,
    today: date,
    debt_filter: DebtFilter = "ALL",
    customer_id: Optional[uuid.UUID] = None,
    limit: int = 2000
) -> list[Debt]:
    """List debts ordered by due date."""
    query = select(Debt)

    if customer_id:
        query = query.where(Debt.customer_id == customer_id)

    if debt_filter == "DUE_TODAY":
        query = query.where(Debt.due_date == today, Debt.status != DebtStatus.PAID)
    elif debt_filter != "ALL":
        query = query.where(Debt.status == DebtStatus(debt_filter))

    query = query.order_by(col(Debt.due_date).asc()).limit(limit)
    return db.exec(query).all()


def update_debt_status(
    db: Session,
    debt_id: uuid.UUID,
    status: DebtStatus,
    today: date
) -> Debt | None:
    """Change a debt's status by hand.

    PAID is terminal, and OVERDUE requires the due date to be in the past.
    """
    debt = db.get(Debt, debt_id)
    if not debt:
        return None

    if debt.status == status:
        return debt
    if debt.status == DebtStatus.PAID:
        raise InvalidStatusTransition("A paid debt can't be reopened")
    if status == DebtStatus.OVERDUE and not debt.due_date < today:
        raise InvalidStatusTransition("Only debts past their due date can be overdue")

    debt.status = status
    db.add(debt)
    db.commit()
    db.refresh(debt)

    return debt
