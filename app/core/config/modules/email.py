from typing import Optional
from pydantic import Field, SecretStr, PositiveInt
from app.core.config.base import EnvBaseSettings


class EmailSettings(EnvBaseSettings):
    EMAIL_HOST: str = Field(
        default="smtp-relay.brevo.com", description="Mail server host"
    )
    EMAIL_PORT: PositiveInt = Field(default=587, description="Mail server port")
    EMAIL_HOST_USER: Optional[str] = Field(
        default=None, description="Mail server login"
    )
    EMAIL_HOST_PASSWORD: Optional[SecretStr] = Field(
        default=None, repr=False, description="Mail server password"
    )
    EMAIL_SENDER: Optional[str] = Field(
        default=None, description="From address; falls back to EMAIL_HOST_USER"
    )
    EMAIL_SENDER_NAME: str = Field(
        default="Harari EBDAL Mugad", description="Display name for outgoing mail"
    )
    EMAIL_USE_TLS: bool = Field(default=True, description="Use STARTTLS")
    EMAIL_USE_SSL: bool = Field(default=False, description="Use SSL")
    EMAIL_TIMEOUT: PositiveInt = Field(
        default=10, description="Mail connection timeout (seconds)"
    )
    EMAIL_SSL_CERT_REQS: Optional[str] = Field(
        default="optional", description="SSL certificate verification"
    )
    EMAIL_MAX_RETRIES: PositiveInt = Field(
        default=3, description="Delivery attempts per message"
    )
    EMAIL_RETRY_DELAY: float = Field(
        default=1.0, description="Linear backoff step between attempts (seconds)"
    )
    FRONTEND_URL: str = Field(
        default="https://harari-ebdal.vercel.app",
        description="Public site URL used in email links",
    )

    @property
    def is_configured(self) -> bool:
        return bool(self.EMAIL_HOST_USER and self.EMAIL_HOST_PASSWORD)

    @property
    def sender_address(self) -> Optional[str]:
        return self.EMAIL_SENDER or self.EMAIL_HOST_USER
