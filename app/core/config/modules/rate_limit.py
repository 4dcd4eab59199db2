from pydantic import Field, PositiveInt
from app.core.config.base import EnvBaseSettings


class RateLimitSettings(EnvBaseSettings):
    RATE_LIMIT: PositiveInt = Field(
        default=5, description="Maximum subscribe requests per window"
    )
    PER_SECONDS: PositiveInt = Field(default=60, description="Rate limit window (seconds)")
