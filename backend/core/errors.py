class ReminderError(Exception):
    """Base class for errors raised by the reminder job."""


class AuthorizationError(ReminderError):
    """The caller of the reminder job is not allowed to trigger it."""


class StoreReadError(ReminderError):
    """Selecting debts for a run failed. The whole run is aborted."""


class ConfigurationError(ReminderError):
    """A provider client is missing its credentials."""


class DeliveryError(ReminderError):
    """An external provider rejected a request."""

    def __init__(self, provider: str, status_code: int, body: str = ""):
        self.provider = provider
        self.status_code = status_code
        self.body = body
        super().__init__(f"{provider} error ({status_code}): {body}")


class WhatsAppAPIError(DeliveryError):
    def __init__(self, status_code: int, body: str = ""):
        super().__init__("WhatsApp API", status_code, body)


class PushNotificationError(DeliveryError):
    def __init__(self, status_code: int, body: str = ""):
        super().__init__("OneSignal", status_code, body)
