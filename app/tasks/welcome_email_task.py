import asyncio
from app.core.celery import celery_app
from app.core.config.settings import settings
from app.core.exceptions import NotificationError
from app.core.logger import logger_manager
from app.utils.email import email_service


logger = logger_manager.get_logger(__name__)


@celery_app.task(name="welcome_email_task")
def welcome_email_task(subscriber_email: str) -> bool:
    """Send the newsletter welcome email. Failure is logged, never raised."""
    if not email_service.is_configured:
        logger.warning("⚠️ SMTP not configured, skipping welcome email")
        return False

    subject = f"Welcome to {settings.app.APP_NAME} Newsletter! 🎉"
    try:
        asyncio.run(
            email_service.send_email(
                subject=subject,
                recipient=subscriber_email,
                template="welcome",
            )
        )
    except NotificationError as e:
        logger.error(f"Welcome email to {subscriber_email} failed: {e}")
        return False
    return True
