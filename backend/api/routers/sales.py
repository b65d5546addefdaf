import uuid
from fastapi import APIRouter, HTTPException

from api.deps import SessionDep
from crud import customers as crud_customers
from crud import sales as crud_sales
from models.enums import PaymentType
from schemas.sales import SaleCreate, SaleResponse

router = APIRouter(prefix="/sales", tags=["sales"])


@router.post("", response_model=SaleResponse, status_code=201)
def create_sale(sale_data: SaleCreate, db: SessionDep):
    """Record a sale. DEBT sales create a debt for the unpaid remainder."""
    if sale_data.payment_type == PaymentType.DEBT:
        customer = crud_customers.get_customer_by_id(db, sale_data.customer_id)
        if not customer:
            raise HTTPException(status_code=404, detail="Customer not found")

    return crud_sales.create_sale(db, sale_data)


@router.get("", response_model=list[SaleResponse])
def list_sales(db: SessionDep):
    """List sales, newest first."""
    return crud_sales.list_sales(db)


@router.get("/{sale_id}", response_model=SaleResponse)
def get_sale(sale_id: uuid.UUID, db: SessionDep):
    """Get sale details."""
    sale = crud_sales.get_sale_by_id(db, sale_id)
    if not sale:
        raise HTTPException(status_code=404, detail="Sale not found")
    return sale
