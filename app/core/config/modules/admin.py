from typing import Optional
from pydantic import Field, SecretStr
from app.core.config.base import EnvBaseSettings


class AdminSettings(EnvBaseSettings):
    ADMIN_SECRET: SecretStr = Field(
        default=SecretStr(""),
        repr=False,
        description="Shared secret for the admin panel login",
    )
    ADMIN_EMAIL: Optional[str] = Field(
        default=None, description="Address that receives new subscriber alerts"
    )
