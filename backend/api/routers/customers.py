import uuid
from typing import Optional
from fastapi import APIRouter, HTTPException, Query

from api.deps import SessionDep
from crud import customers as crud_customers
from schemas.customers import CustomerCreate, CustomerResponse

router = APIRouter(prefix="/customers", tags=["customers"])


@router.post("", response_model=CustomerResponse, status_code=201)
def create_customer(customer_data: CustomerCreate, db: SessionDep):
    """Create a customer."""
    return crud_customers.create_customer(db, customer_data)


@router.get("", response_model=list[CustomerResponse])
def list_customers(
    q: Optional[str] = Query(None, description="Search by name or phone"),
    db: SessionDep = None
):
    """List customers, newest first."""
    return crud_customers.list_customers(db, q=q)


@router.get("/{customer_id}", response_model=CustomerResponse)
def get_customer(customer_id: uuid.UUID, db: SessionDep):
    """Get customer details."""
    customer = crud_customers.get_customer_by_id(db, customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer


@router.delete("/{customer_id}", status_code=204)
def delete_customer(customer_id: uuid.UUID, db: SessionDep):
    """Delete a customer and their debts."""
    if not crud_customers.delete_customer(db, customer_id):
        raise HTTPException(status_code=404, detail="Customer not found")
