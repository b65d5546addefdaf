from models.customers import Customer
from models.debts import Debt
from models.sales import Sale

__all__ = [
    "Customer",
    "Debt",
    "Sale",
]
