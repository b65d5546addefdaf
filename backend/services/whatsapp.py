import logging
from typing import Any, Optional

import httpx

from core.config import Settings, settings as default_settings
from core.errors import ConfigurationError, WhatsAppAPIError
from core.utils import normalize_phone_for_wa

logger = logging.getLogger(__name__)

GRAPH_API_URL = "https://graph.facebook.com"


class WhatsAppClient:
    """Sends text messages through the Meta WhatsApp Cloud API."""

    def __init__(
        self,
        token: Optional[str],
        phone_number_id: Optional[str],
        api_version: str = "v19.0",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.token = token
        self.phone_number_id = phone_number_id
        self.api_version = api_version
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings = default_settings) -> "WhatsAppClient":
        return cls(
            token=settings.WHATSAPP_TOKEN,
            phone_number_id=settings.WHATSAPP_PHONE_NUMBER_ID,
            api_version=settings.WHATSAPP_API_VERSION,
            timeout=settings.HTTP_TIMEOUT_SECONDS,
        )

    @property
    def messages_url(self) -> str:
        return f"{GRAPH_API_URL}/{self.api_version}/{self.phone_number_id}/messages"

    async def send_text(self, to_phone: str, body: str) -> dict[str, Any]:
        """Send a plain text message.

        Raises:
            ConfigurationError: token or phone number id not configured
            WhatsAppAPIError: the API answered with a non-2xx status
        """
        if not self.token or not self.phone_number_id:
            raise ConfigurationError("Missing WHATSAPP_TOKEN or WHATSAPP_PHONE_NUMBER_ID")

        to = normalize_phone_for_wa(to_phone)
        payload = {
            "messaging_product": "whatsapp",
            "to": to,
            "type": "text",
            "text": {"body": body},
        }

        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            response = await client.post(
                self.messages_url,
                json=payload,
                headers={
                    "Authorization": f"Bearer {self.token}",
                    "Content-Type": "application/json",
                },
            )

        if response.is_error:
            raise WhatsAppAPIError(response.status_code, response.text)

        logger.info(f"[WhatsApp] Message sent to {to}")
        try:
            return response.json()
        except ValueError:
            return {}
