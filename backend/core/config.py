from typing import Annotated, Any, Literal

from pydantic import BeforeValidator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


def parse_cors(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",") if i.strip()]
    elif isinstance(v, list | str):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file="./.env",
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "Mokhtar Cell API"
    VERSION: str = "0.1.0"

    BACKEND_CORS_ORIGINS: Annotated[list[str] | str, BeforeValidator(parse_cors)] = []

    ENVIRONMENT: Literal["local", "staging", "production"] = "local"

    # Database configuration
    SQLITE_FILE_NAME: str = "mokhtar.db"

    # Scheduler auth. Unset means every caller is accepted.
    CRON_SECRET: str | None = None

    # Included in push notifications so staff can open the dashboard
    APP_PUBLIC_URL: str | None = None

    # Meta WhatsApp Cloud API
    WHATSAPP_TOKEN: str | None = None
    WHATSAPP_PHONE_NUMBER_ID: str | None = None
    WHATSAPP_API_VERSION: str = "v19.0"

    # OneSignal push notifications
    ONESIGNAL_APP_ID: str | None = None
    ONESIGNAL_REST_API_KEY: str | None = None

    HTTP_TIMEOUT_SECONDS: float = 10.0

    # Upper bound of debts handled per reminder run
    REMINDER_BATCH_LIMIT: int = 200

    # Message content
    BUSINESS_NAME: str = "Mokhtar Cell"
    BUSINESS_NAME_AR: str = "مختار سيل"
    BUSINESS_CONTACT_PHONE: str = "03 158 798"
    PUSH_TITLE: str = "Mokhtar Dashboard - Reminder sent"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:  # noqa
        return f"sqlite:///{self.SQLITE_FILE_NAME}"


settings = Settings()  # type: ignore
