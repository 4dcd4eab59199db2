from functools import cached_property

from app.core.config.modules.admin import AdminSettings
from app.core.config.modules.app import AppSettings
from app.core.config.modules.celery import CelerySettings
from app.core.config.modules.cors import CORSSettings
from app.core.config.modules.database import DatabaseSettings
from app.core.config.modules.email import EmailSettings
from app.core.config.modules.logging import LoggingSettings
from app.core.config.modules.rate_limit import RateLimitSettings
from app.core.config.modules.redis import RedisSettings
from app.core.config.modules.session import SessionSettings


class Settings:
    @cached_property
    def admin(self) -> AdminSettings:
        return AdminSettings()

    @cached_property
    def app(self) -> AppSettings:
        return AppSettings()

    @cached_property
    def celery(self) -> CelerySettings:
        return CelerySettings()

    @cached_property
    def cors(self) -> CORSSettings:
        return CORSSettings()

    @cached_property
    def database(self) -> DatabaseSettings:
        return DatabaseSettings()

    @cached_property
    def email(self) -> EmailSettings:
        return EmailSettings()

    @cached_property
    def logging(self) -> LoggingSettings:
        return LoggingSettings()

    @cached_property
    def rate_limit(self) -> RateLimitSettings:
        return RateLimitSettings()

    @cached_property
    def redis(self) -> RedisSettings:
        return RedisSettings()

    @cached_property
    def session(self) -> SessionSettings:
        return SessionSettings()


# Create a global settings instance
settings = Settings()
