import secrets
from pydantic import Field, SecretStr
from app.core.config.base import EnvBaseSettings


class SessionSettings(EnvBaseSettings):
    # unset: a random per-process key, so admin sessions end on restart
    SESSION_SECRET_KEY: SecretStr = Field(
        default_factory=lambda: SecretStr(secrets.token_urlsafe(32)),
        repr=False,
        description="Key used to sign the session cookie",
    )
    SESSION_HTTPS_ONLY: bool = Field(
        default=True, description="Only send the session cookie over HTTPS"
    )
    SESSION_MAX_AGE: int = Field(
        default=8 * 3600, description="Admin session lifetime (seconds)"
    )
