from enum import Enum


class Currency(str, Enum):
    USD = "USD"
    LBP = "LBP"


class DebtType(str, Enum):
    MOBILE = "MOBILE"
    REPAIR = "REPAIR"
    TRANSFER = "TRANSFER"
    SUBSCRIPTION = "SUBSCRIPTION"
    OTHER = "OTHER"


class DebtStatus(str, Enum):
    PENDING = "PENDING"
    OVERDUE = "OVERDUE"
    PAID = "PAID"


# Only these statuses are eligible for reminders
REMINDABLE_STATUSES = (DebtStatus.PENDING, DebtStatus.OVERDUE)


class PaymentType(str, Enum):
    CASH = "CASH"
    DEBT = "DEBT"
