import re
from datetime import date, datetime, time, timezone
from decimal import Decimal, ROUND_HALF_UP

from models.enums import Currency

NON_DIGITS = re.compile(r"\D")

LEBANON_CC = "961"


def normalize_phone_for_wa(phone: str) -> str:
    """Convert a Lebanese number like 03xxxxxx / 70xxxxxx to 961XXXXXXXX.

    Never raises: anything that doesn't match a known shape is returned as
    bare digits, which may not be dialable.
    """
    digits = NON_DIGITS.sub("", phone or "")
    if digits.startswith(LEBANON_CC):
        return digits
    if len(digits) == 8 and digits.startswith("0"):
        return LEBANON_CC + digits[1:]
    if len(digits) == 8:
        # assume missing leading 0
        return LEBANON_CC + digits
    return digits


def _to_decimal(amount: int | float | Decimal) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    return Decimal(str(amount))


def fmt_money(amount: int | float | Decimal, currency: Currency | str) -> str:
    """Render an amount for display: "$12.50" or "1,500,000 LBP"."""
    value = _to_decimal(amount)
    currency = Currency(currency)
    if currency == Currency.USD:
        return f"${value.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)}"
    if currency == Currency.LBP:
        rounded = int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
        return f"{rounded:,} LBP"
    raise ValueError(f"Unsupported currency: {currency}")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; every stored timestamp is UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def today_utc(now: datetime | None = None) -> date:
    return as_utc(now or utc_now()).date()


def start_of_utc_day(now: datetime | None = None) -> datetime:
    return datetime.combine(today_utc(now), time.min, tzinfo=timezone.utc)
