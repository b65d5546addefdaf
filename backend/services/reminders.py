import logging
from datetime import datetime
from typing import Any, Callable, Optional, Protocol

from sqlmodel import Session

from core.config import settings
from core.utils import as_utc, start_of_utc_day, today_utc, utc_now
from crud import reminders as crud_reminders
from schemas.reminders import (
    DispatchResult,
    ReminderCandidate,
    ReminderFailure,
    ReminderRunResponse,
)
from services.messages import build_reminder_message

logger = logging.getLogger(__name__)


class MessageSender(Protocol):
    async def send_text(self, to_phone: str, body: str) -> Any: ...


class PushNotifier(Protocol):
    async def send_to_subscribers(self, title: str, message: str, url: Optional[str] = None) -> Any: ...


def push_message_for(candidate: ReminderCandidate) -> str:
    return (
        f"WhatsApp reminder sent to {candidate.customer_name} "
        f"({candidate.currency.value} {candidate.amount})"
    )


async def dispatch_reminders(
    db: Session,
    candidates: list[ReminderCandidate],
    whatsapp: MessageSender,
    push: PushNotifier,
    found: Optional[int] = None,
    app_url: Optional[str] = None,
    push_title: str = settings.PUSH_TITLE,
    clock: Callable[[], datetime] = utc_now,
) -> DispatchResult:
    """Send one reminder per candidate, one at a time.

    A failing candidate is recorded in ``failures`` and the loop moves on;
    nothing here aborts the batch.
    """
    result = DispatchResult(found=len(candidates) if found is None else found)

    for candidate in candidates:
        try:
            message = build_reminder_message(
                name=candidate.customer_name,
                phone=candidate.phone,
                amount=candidate.amount,
                currency=candidate.currency,
                due_date=candidate.due_date,
                debt_type=candidate.type,
            )
            await whatsapp.send_text(candidate.phone, message.text)
            await push.send_to_subscribers(
                title=push_title,
                message=push_message_for(candidate),
                url=app_url or None,
            )
            crud_reminders.record_reminder_sent(db, candidate.debt_id, clock())
        except Exception as e:
            db.rollback()
            logger.warning(f"[Reminders] Failed for debt {candidate.debt_id}: {e}")
            result.failures.append(ReminderFailure(id=candidate.debt_id, err=str(e) or type(e).__name__))
            continue

        result.sent += 1

    return result


async def run_reminder_job(
    db: Session,
    whatsapp: MessageSender,
    push: PushNotifier,
    now: Optional[datetime] = None,
    limit: int = settings.REMINDER_BATCH_LIMIT,
    app_url: Optional[str] = settings.APP_PUBLIC_URL,
) -> ReminderRunResponse:
    """One reminder run: promote overdue debts, select, send, record.

    Raises:
        StoreReadError: selecting the debts failed
    """
    if now is not None:
        now = as_utc(now)
        clock = lambda: now  # noqa: E731
    else:
        now = utc_now()
        clock = utc_now
    today = today_utc(now)
    logger.info(f"[Reminders] Run started for {today.isoformat()}")

    selection = crud_reminders.select_due_debts(
        db, today, start_of_utc_day(now), limit=limit
    )
    logger.info(
        f"[Reminders] Found {selection.found} debt(s), {len(selection.candidates)} with a phone"
    )

    result = await dispatch_reminders(
        db,
        selection.candidates,
        whatsapp,
        push,
        found=selection.found,
        app_url=app_url,
        clock=clock,
    )
    logger.info(
        f"[Reminders] Run finished: sent {result.sent}/{result.found}, "
        f"{len(result.failures)} failure(s)"
    )

    return ReminderRunResponse(
        ok=True,
        today=today,
        found=result.found,
        sent=result.sent,
        failures=result.failures,
    )
