import logging
import uuid
from datetime import date, datetime
from sqlalchemy import or_, update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select, Session, col

from core.errors import StoreReadError
from core.utils import as_utc
from models.customers import Customer
from models.debts import Debt
from models.enums import DebtStatus, REMINDABLE_STATUSES
from schemas.reminders import DueDebtSelection, ReminderCandidate

logger = logging.getLogger(__name__)

DEFAULT_CUSTOMER_NAME = "Customer"


def mark_overdue_debts(db: Session, today: date) -> int:
    """Move every PENDING debt whose due date has passed to OVERDUE.

    Returns the number of rows changed. Running it twice is a no-op the
    second time.
    """
    result = db.exec(
        update(Debt)
        .where(Debt.status == DebtStatus.PENDING, col(Debt.due_date) < today)
        .values(status=DebtStatus.OVERDUE)
    )
    db.commit()
    return result.rowcount or 0


def get_debts_due_for_reminder(
    db: Session,
    today: date,
    day_start: datetime,
    limit: int = 200
) -> list[tuple[Debt, Customer | None]]:
    """Open debts due today or earlier that haven't been reminded since day_start."""
    query = (
        select(Debt, Customer)
        .join(Customer, Debt.customer_id == Customer.id, isouter=True)
        .where(
            col(Debt.status).in_(REMINDABLE_STATUSES),
            col(Debt.due_date) <= today,
            or_(
                col(Debt.reminder_last_sent_at).is_(None),
                col(Debt.reminder_last_sent_at) < day_start,
            ),
        )
        .order_by(col(Debt.due_date).asc())
        .limit(limit)
    )
    return db.exec(query).all()


def _to_candidate(debt: Debt, customer: Customer | None) -> ReminderCandidate | None:
    phone = (customer.phone or "").strip() if customer else ""
    if not phone:
        return None

    return ReminderCandidate(
        debt_id=debt.id,
        customer_name=(customer.name or "").strip() or DEFAULT_CUSTOMER_NAME,
        phone=phone,
        amount=debt.amount or 0,
        currency=debt.currency,
        due_date=debt.due_date,
        type=debt.type or "OTHER",
        reminder_count=debt.reminder_count or 0,
    )


def select_due_debts(
    db: Session,
    today: date,
    day_start: datetime,
    limit: int = 200
) -> DueDebtSelection:
    """Promote overdue debts, then pick the ones that need a reminder today.

    Debts whose customer has no phone are skipped: they are counted in
    ``found`` but never attempted.
    """
    try:
        promoted = mark_overdue_debts(db, today)
        logger.info(f"[Reminders] Marked {promoted} debt(s) as overdue")
        rows = get_debts_due_for_reminder(db, today, day_start, limit=limit)
    except SQLAlchemyError as e:
        db.rollback()
        raise StoreReadError(f"Failed to load debts due for reminder: {e}") from e

    candidates: list[ReminderCandidate] = []
    skipped: list[uuid.UUID] = []
    for debt, customer in rows:
        candidate = _to_candidate(debt, customer)
        if candidate is None:
            skipped.append(debt.id)
            continue
        candidates.append(candidate)

    if skipped:
        logger.info(f"[Reminders] Skipping {len(skipped)} debt(s) without a customer phone")

    return DueDebtSelection(found=len(rows), candidates=candidates, skipped=skipped)


def record_reminder_sent(
    db: Session,
    debt_id: uuid.UUID,
    sent_at: datetime
) -> Debt:
    """Stamp the reminder time and bump the counter of a debt."""
    debt = db.get(Debt, debt_id)
    if not debt:
        raise LookupError(f"Debt {debt_id} not found")

    sent_at = as_utc(sent_at)
    previous = debt.reminder_last_sent_at
    if previous is None or as_utc(previous) <= sent_at:
        debt.reminder_last_sent_at = sent_at
    debt.reminder_count = (debt.reminder_count or 0) + 1
    db.add(debt)
    db.commit()
    db.refresh(debt)

    return debt
