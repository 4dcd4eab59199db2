from typing import Optional

from fastapi import Request

from app.core.config.settings import settings
from app.core.exceptions import AuthDenied, InvalidInput
from app.core.logger import logger_manager


ADMIN_SESSION_KEY = "is_admin"


class AdminService:
    """Static shared-secret gate for the admin panel."""

    def __init__(self, admin_secret: str):
        self.admin_secret = admin_secret
        self.logger = logger_manager.get_logger(__name__)

    def authenticate(self, supplied_secret: Optional[str]) -> bool:
        if not supplied_secret:
            raise InvalidInput("Password is required")

        # plain equality; an unset ADMIN_SECRET never matches
        if self.admin_secret and supplied_secret == self.admin_secret:
            self.logger.info("✅ Admin login successful")
            return True

        self.logger.warning("❌ Admin login failed - wrong password")
        return False


def get_admin_service() -> AdminService:
    return AdminService(admin_secret=settings.admin.ADMIN_SECRET.get_secret_value())


def require_admin(request: Request) -> None:
    """Dependency for admin routes: the session must come from a prior login."""
    if not request.session.get(ADMIN_SESSION_KEY):
        raise AuthDenied("Admin authentication required")
