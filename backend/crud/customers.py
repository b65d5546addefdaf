import uuid
from typing import Optional
from sqlalchemy import or_, update
from sqlmodel import select, Session, col
from models.customers import Customer
from models.debts import Debt
from models.sales import Sale
from schemas.customers import CustomerCreate


def create_customer(
    db: Session,
    customer_data: CustomerCreate
) -> Customer:
    """Create a customer."""
    customer = Customer(
        name=customer_data.name,
        phone=customer_data.phone,
        notes=customer_data.notes,
        preferred_currency=customer_data.preferred_currency,
    )
    db.add(customer)
    db.commit()
    db.refresh(customer)

    return customer


def get_customer_by_id(
    db: Session,
    customer_id: uuid.UUID
) -> Customer | None:
    """Get customer by ID."""
    return db.get(Customer, customer_id)


def list_customers(
    db: Session,
    q: Optional[str] = None,
    limit: int = 2000
) -> list[Customer]:
    """List customers, newest first, optionally searching name or phone."""
    query = select(Customer)

    if q:
        pattern = f"%{q.strip()}%"
        query = query.where(
            or_(col(Customer.name).ilike(pattern), col(Customer.phone).ilike(pattern))
        )

    query = query.order_by(col(Customer.created_at).desc()).limit(limit)
    return db.exec(query).all()


def delete_customer(
    db: Session,
    customer_id: uuid.UUID
) -> bool:
    """Delete a customer with their debts. Their sales are kept but unlinked."""
    customer = db.get(Customer, customer_id)
    if not customer:
        return False

    debt_ids = db.exec(select(Debt.id).where(Debt.customer_id == customer_id)).all()
    if debt_ids:
        db.exec(
            update(Sale).where(col(Sale.debt_id).in_(debt_ids)).values(debt_id=None)
        )
    db.exec(
        update(Sale).where(Sale.customer_id == customer_id).values(customer_id=None)
    )
    for debt in db.exec(select(Debt).where(Debt.customer_id == customer_id)).all():
        db.delete(debt)

    db.delete(customer)
    db.commit()

    return True
