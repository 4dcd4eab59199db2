from pydantic import Field
from app.core.config.base import EnvBaseSettings, ENV


class AppSettings(EnvBaseSettings):
    """Application metadata configuration"""

    APP_NAME: str = Field(default="Harari EBDAL", description="Application name")

    APP_DESCRIPTION: str = Field(
        default="Newsletter, admin and donation statistics API for the Harari EBDAL Mugad website.",
        description="Application description",
    )

    APP_VERSION: str = Field(default="0.1.0", description="Application version")

    ENV: str = Field(default=ENV, description="Deployment environment name")
