# contact_relay/core/settings.py
from email.headerregistry import HeaderRegistry
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_headers = HeaderRegistry()


class SmtpConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
        frozen=True,
    )

    smtp_server: str = Field(min_length=1, alias="SMTP_SERVER")
    # Also the From address, so it must parse as a mailbox
    smtp_user: str = Field(min_length=1, alias="SMTP_USER")
    smtp_password: str = Field(min_length=1, alias="SMTP_PASSWORD")
    default_receiver: str = Field(min_length=1, alias="DEFAULT_RECEIVER")

    # 465 is the implicit-TLS submission port
    smtp_port: int = Field(default=465, alias="SMTP_PORT")

    cors_origins: str = Field(default="", alias="CORS_ORIGINS")
    port: int = Field(default=8000, alias="PORT")
    workers: int = Field(default=2, ge=1, alias="WEB_CONCURRENCY")

    @field_validator("smtp_user", "default_receiver")
    @classmethod
    def _must_be_mailbox(cls, value: str) -> str:
        # syntax only: local hosts and reserved TLDs are valid relay targets
        header = _headers("To", value)
        if header.defects or len(header.addresses) != 1:
            raise ValueError(f"{value!r} is not a single mailbox address")
        address = header.addresses[0]
        if not address.username or not address.domain:
            raise ValueError(f"{value!r} is not a single mailbox address")
        return value

    @property
    def allowed_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> SmtpConfig:
    return SmtpConfig()
