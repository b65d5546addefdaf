from datetime import date
from decimal import Decimal
from typing import NamedTuple, Optional
from urllib.parse import quote

from core.config import settings
from core.utils import fmt_money, normalize_phone_for_wa
from models.enums import Currency, DebtType
from schemas.reminders import ReminderMessage


class TypeLabel(NamedTuple):
    en: str
    ar: str


TYPE_LABELS: dict[DebtType, TypeLabel] = {
    DebtType.MOBILE: TypeLabel("mobile/device", "موبايل/جهاز"),
    DebtType.REPAIR: TypeLabel("repair service", "تصليح/صيانة"),
    DebtType.TRANSFER: TypeLabel("transfer/service", "تحويل/خدمات"),
    DebtType.SUBSCRIPTION: TypeLabel("subscription", "اشتراك"),
    DebtType.OTHER: TypeLabel("service", "خدمة"),
}

# encodeURIComponent leaves these unescaped too
_URI_COMPONENT_SAFE = "!~*'()"


def type_label(debt_type: DebtType | str) -> TypeLabel:
    try:
        return TYPE_LABELS[DebtType(debt_type)]
    except ValueError:
        return TYPE_LABELS[DebtType.OTHER]


def build_wa_link(phone: str, text: str) -> str:
    """Click-to-chat link that opens WhatsApp with the text pre-filled."""
    return f"https://wa.me/{normalize_phone_for_wa(phone)}?text={quote(text, safe=_URI_COMPONENT_SAFE)}"


def build_reminder_message(
    name: str,
    phone: str,
    amount: int | float | Decimal,
    currency: Currency | str,
    due_date: date | str,
    debt_type: DebtType | str,
    converted_text: Optional[str] = None,
    business_name: str = settings.BUSINESS_NAME,
    business_name_ar: str = settings.BUSINESS_NAME_AR,
    contact_phone: str = settings.BUSINESS_CONTACT_PHONE,
) -> ReminderMessage:
    """Compose the bilingual (English/Arabic) payment reminder for a debt.

    Args:
        name: Customer display name
        phone: Customer phone as typed in, normalized for the link
        amount: Amount owed
        currency: USD or LBP
        due_date: Due date, rendered as YYYY-MM-DD
        debt_type: What the debt is for, picks the label
        converted_text: Optional conversion note, e.g. "≈ 1,340,000 LBP"

    Returns:
        The message text and its wa.me link
    """
    label = type_label(debt_type)
    money = fmt_money(amount, currency)
    conv = f" ({converted_text})" if converted_text else ""
    due = due_date.isoformat() if isinstance(due_date, date) else due_date

    text = (
        f"{business_name} | {business_name_ar}\n"
        f"Hi {name} 👋\n"
        f"Your {label.en} payment is: {money}{conv}\n"
        f"Due date: {due}\n"
        "\n"
        f"مرحبا {name} 👋\n"
        f"دفعتك مقابل {label.ar} هي: {money}{conv}\n"
        f"تاريخ الاستحقاق: {due}\n"
        "\n"
        "Please confirm once paid 🙏\n"
        f"— {business_name} | {contact_phone}"
    )

    return ReminderMessage(text=text, wa_link=build_wa_link(phone, text))
