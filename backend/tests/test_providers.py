import json

import httpx
import pytest

from core.errors import ConfigurationError, PushNotificationError, WhatsAppAPIError
from services.push import OneSignalClient
from services.whatsapp import WhatsAppClient


def recording_transport(status_code=200, body=None):
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if isinstance(body, str):
            return httpx.Response(status_code, text=body)
        return httpx.Response(status_code, json=body if body is not None else {})

    return httpx.MockTransport(handler), requests


class TestWhatsAppClient:
    @pytest.mark.asyncio
    async def test_posts_text_message(self):
        transport, requests = recording_transport(body={"messages": [{"id": "wamid.1"}]})
        client = WhatsAppClient("tok", "1234567", transport=transport)

        result = await client.send_text("03 158 798", "Hello")

        assert result == {"messages": [{"id": "wamid.1"}]}
        request = requests[0]
        assert str(request.url) == "https://graph.facebook.com/v19.0/1234567/messages"
        assert request.headers["Authorization"] == "Bearer tok"
        assert json.loads(request.content) == {
            "messaging_product": "whatsapp",
            "to": "9613158798",
            "type": "text",
            "text": {"body": "Hello"},
        }

    @pytest.mark.asyncio
    async def test_error_status(self):
        transport, _ = recording_transport(status_code=401, body="token expired")
        client = WhatsAppClient("tok", "1234567", transport=transport)

        with pytest.raises(WhatsAppAPIError) as exc_info:
            await client.send_text("70123456", "Hello")

        assert exc_info.value.status_code == 401
        assert str(exc_info.value) == "WhatsApp API error (401): token expired"

    @pytest.mark.asyncio
    async def test_missing_credentials(self):
        transport, requests = recording_transport()
        client = WhatsAppClient(None, "1234567", transport=transport)

        with pytest.raises(ConfigurationError, match="WHATSAPP_TOKEN"):
            await client.send_text("70123456", "Hello")
        assert requests == []

    @pytest.mark.asyncio
    async def test_non_json_success_body(self):
        transport, _ = recording_transport(body="")
        client = WhatsAppClient("tok", "1234567", transport=transport)

        assert await client.send_text("70123456", "Hello") == {}


class TestOneSignalClient:
    @pytest.mark.asyncio
    async def test_notifies_subscribed_users(self):
        transport, requests = recording_transport(body={"id": "n-1"})
        client = OneSignalClient("app-1", "key-1", transport=transport)

        await client.send_to_subscribers("Reminder sent", "Sent to Ali", url="https://dash.example.com")

        request = requests[0]
        assert str(request.url) == "https://onesignal.com/api/v1/notifications"
        assert request.headers["Authorization"] == "Basic key-1"
        assert json.loads(request.content) == {
            "app_id": "app-1",
            "included_segments": ["Subscribed Users"],
            "headings": {"en": "Reminder sent"},
            "contents": {"en": "Sent to Ali"},
            "url": "https://dash.example.com",
        }

    @pytest.mark.asyncio
    async def test_url_is_optional(self):
        transport, requests = recording_transport()
        client = OneSignalClient("app-1", "key-1", transport=transport)

        await client.send_to_subscribers("Reminder sent", "Sent to Ali")

        assert "url" not in json.loads(requests[0].content)

    @pytest.mark.asyncio
    async def test_error_status(self):
        transport, _ = recording_transport(status_code=400, body='{"errors":["bad app"]}')
        client = OneSignalClient("app-1", "key-1", transport=transport)

        with pytest.raises(PushNotificationError, match=r"OneSignal error \(400\)"):
            await client.send_to_subscribers("t", "m")

    @pytest.mark.asyncio
    async def test_missing_credentials(self):
        client = OneSignalClient("app-1", None)

        with pytest.raises(ConfigurationError, match="ONESIGNAL_REST_API_KEY"):
            await client.send_to_subscribers("t", "m")
