import logging
from fastapi import APIRouter, Depends

from api.deps import PushDep, SessionDep, WhatsAppDep, require_cron_auth
from core.config import settings
from schemas.reminders import ReminderRunResponse
from services.reminders import run_reminder_job

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cron", tags=["cron"])


@router.get(
    "/reminders",
    response_model=ReminderRunResponse,
    response_model_exclude_none=True,
    dependencies=[Depends(require_cron_auth)],
)
async def send_due_reminders(db: SessionDep, whatsapp: WhatsAppDep, push: PushDep):
    """Daily job: mark overdue debts and send WhatsApp reminders for the ones due.

    Partial failures still answer 200; check ``failures`` in the body.
    """
    return await run_reminder_job(
        db,
        whatsapp,
        push,
        limit=settings.REMINDER_BATCH_LIMIT,
        app_url=settings.APP_PUBLIC_URL,
    )
