import uuid
from typing import Optional
from fastapi import APIRouter, HTTPException, Query

from api.deps import SessionDep
from core.utils import today_utc
from crud import customers as crud_customers
from crud import debts as crud_debts
from schemas.debts import DebtCreate, DebtResponse, DebtStatusUpdate
from schemas.reminders import ReminderMessage
from services.messages import build_reminder_message

router = APIRouter(prefix="/debts", tags=["debts"])


@router.post("", response_model=DebtResponse, status_code=201)
def create_debt(debt_data: DebtCreate, db: SessionDep):
    """Create a pending debt for a customer."""
    customer = crud_customers.get_customer_by_id(db, debt_data.customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")

    return crud_debts.create_debt(db, debt_data)


@router.get("", response_model=list[DebtResponse])
def list_debts(
    debt_filter: crud_debts.DebtFilter = Query("ALL", alias="filter", description="ALL, PENDING, OVERDUE, PAID or DUE_TODAY"),
    customer_id: Optional[uuid.UUID] = Query(None, description="Filter by customer"),
    db: SessionDep = None
):
    """List debts, soonest due first."""
    return crud_debts.list_debts(db, today_utc(), debt_filter=debt_filter, customer_id=customer_id)


@router.get("/{debt_id}", response_model=DebtResponse)
def get_debt(debt_id: uuid.UUID, db: SessionDep):
    """Get debt details."""
    debt = crud_debts.get_debt_by_id(db, debt_id)
    if not debt:
        raise HTTPException(status_code=404, detail="Debt not found")
    return debt


@router.put("/{debt_id}/status", response_model=DebtResponse)
def update_debt_status(debt_id: uuid.UUID, data: DebtStatusUpdate, db: SessionDep):
    """Mark a debt as paid, pending or overdue."""
    try:
        debt = crud_debts.update_debt_status(db, debt_id, data.status, today_utc())
    except crud_debts.InvalidStatusTransition as e:
        raise HTTPException(status_code=409, detail=str(e))
    if not debt:
        raise HTTPException(status_code=404, detail="Debt not found")
    return debt


@router.get("/{debt_id}/reminder-link", response_model=ReminderMessage)
def get_reminder_link(
    debt_id: uuid.UUID,
    converted_text: Optional[str] = Query(None, description="Conversion note shown after the amount"),
    db: SessionDep = None
):
    """Compose the reminder for a debt with a click-to-chat WhatsApp link."""
    debt = crud_debts.get_debt_by_id(db, debt_id)
    if not debt:
        raise HTTPException(status_code=404, detail="Debt not found")

    customer = crud_customers.get_customer_by_id(db, debt.customer_id)
    if not customer or not customer.phone:
        raise HTTPException(status_code=400, detail="Customer has no phone number")

    return build_reminder_message(
        name=customer.name,
        phone=customer.phone,
        amount=debt.amount,
        currency=debt.currency,
        due_date=debt.due_date,
        debt_type=debt.type,
        converted_text=converted_text,
    )
