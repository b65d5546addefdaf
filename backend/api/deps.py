from typing import Annotated, Optional
from sqlmodel import Session
from fastapi import Depends, Query, Request

from core.config import settings
from core.security import verify_cron_auth
from db.session import get_db
from services.push import OneSignalClient
from services.whatsapp import WhatsAppClient

SessionDep = Annotated[Session, Depends(get_db)]


def get_whatsapp_client() -> WhatsAppClient:
    return WhatsAppClient.from_settings(settings)


def get_push_client() -> OneSignalClient:
    return OneSignalClient.from_settings(settings)


WhatsAppDep = Annotated[WhatsAppClient, Depends(get_whatsapp_client)]
PushDep = Annotated[OneSignalClient, Depends(get_push_client)]


def require_cron_auth(
    request: Request,
    secret: Optional[str] = Query(None, description="Shared cron secret")
) -> None:
    """Reject reminder runs from callers without the trusted header or secret."""
    verify_cron_auth(request.headers, secret, settings.CRON_SECRET)

