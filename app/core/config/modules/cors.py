from pydantic import Field
from app.core.config.base import EnvBaseSettings


class CORSSettings(EnvBaseSettings):
    CORS_ALLOWED_ORIGINS: str = Field(
        default="*",
        description="Allowed CORS origins (comma-separated)",
    )
    CORS_ALLOW_CREDENTIALS: bool = Field(
        default=True, description="Allow CORS credentials"
    )
    CORS_ALLOW_METHODS: str = Field(
        default="GET,POST,PUT,DELETE,OPTIONS",
        description="Allowed HTTP methods (comma-separated)",
    )
    CORS_ALLOW_HEADERS: str = Field(
        default="Content-Type,Authorization",
        description="Allowed HTTP headers (comma-separated)",
    )
