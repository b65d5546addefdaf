import logging
from typing import Any, Optional

import httpx

from core.config import Settings, settings as default_settings
from core.errors import ConfigurationError, PushNotificationError

logger = logging.getLogger(__name__)

ONESIGNAL_NOTIFICATIONS_URL = "https://onesignal.com/api/v1/notifications"
SUBSCRIBED_SEGMENT = "Subscribed Users"


class OneSignalClient:
    """Pushes notifications to every device subscribed to the dashboard."""

    def __init__(
        self,
        app_id: Optional[str],
        api_key: Optional[str],
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.app_id = app_id
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings = default_settings) -> "OneSignalClient":
        return cls(
            app_id=settings.ONESIGNAL_APP_ID,
            api_key=settings.ONESIGNAL_REST_API_KEY,
            timeout=settings.HTTP_TIMEOUT_SECONDS,
        )

    async def send_to_subscribers(
        self,
        title: str,
        message: str,
        url: Optional[str] = None
    ) -> dict[str, Any]:
        if not self.app_id or not self.api_key:
            raise ConfigurationError("Missing ONESIGNAL_APP_ID or ONESIGNAL_REST_API_KEY")

        notification_payload = {
            "app_id": self.app_id,
            "included_segments": [SUBSCRIBED_SEGMENT],
            "headings": {"en": title},
            "contents": {"en": message},
        }
        if url:
            notification_payload["url"] = url

        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            response = await client.post(
                ONESIGNAL_NOTIFICATIONS_URL,
                json=notification_payload,
                headers={
                    "Authorization": f"Basic {self.api_key}",
                    "Content-Type": "application/json",
                },
            )

        if response.is_error:
            raise PushNotificationError(response.status_code, response.text)

        logger.info(f"[Push Notification] Sent: {title}")
        try:
            return response.json()
        except ValueError:
            return {}
