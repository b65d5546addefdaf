import uuid
from sqlmodel import select, Session, col
from models.enums import PaymentType
from models.sales import Sale
from schemas.debts import DebtCreate
from schemas.sales import SaleCreate
from crud.debts import create_debt


def create_sale(
    db: Session,
    sale_data: SaleCreate
) -> Sale:
    """Record a sale. A DEBT sale with an unpaid remainder generates a linked debt."""
    sale = Sale(
        item_name=sale_data.item_name,
        currency=sale_data.currency,
        total_amount=sale_data.total_amount,
        paid_amount=sale_data.paid_amount,
        payment_type=sale_data.payment_type,
        customer_id=sale_data.customer_id if sale_data.payment_type == PaymentType.DEBT else None,
    )
    db.add(sale)

    remaining = sale_data.total_amount - sale_data.paid_amount
    if sale_data.payment_type == PaymentType.DEBT and remaining > 0:
        debt = create_debt(
            db,
            DebtCreate(
                customer_id=sale_data.customer_id,
                type=sale_data.debt_type,
                currency=sale_data.currency,
                amount=remaining,
                due_date=sale_data.due_date,
                notes=f"Auto from sale: {sale_data.item_name}",
            ),
            commit=False,
        )
        sale.debt_id = debt.id

    db.commit()
    db.refresh(sale)

    return sale


def get_sale_by_id(
    db: Session,
    sale_id: uuid.UUID
) -> Sale | None:
    """Get sale by ID."""
    return db.get(Sale, sale_id)


def list_sales(
    db: Session,
    limit: int = 2000
) -> list[Sale]:
    """List sales, newest first."""
    return db.exec(
        select(Sale).order_by(col(Sale.created_at).desc()).limit(limit)
    ).all()
