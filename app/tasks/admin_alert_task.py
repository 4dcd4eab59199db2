import asyncio
from app.core.celery import celery_app
from app.core.config.settings import settings
from app.core.exceptions import NotificationError
from app.core.logger import logger_manager
from app.utils.email import email_service


logger = logger_manager.get_logger(__name__)


@celery_app.task(name="admin_alert_task")
def admin_alert_task(admin_email: str, subscriber_email: str) -> bool:
    """Tell the site admin about a new or returning subscriber."""
    if not email_service.is_configured:
        logger.warning("⚠️ SMTP not configured, skipping admin notification")
        return False

    subject = f"🔔 New Subscriber Alert - {settings.app.APP_NAME}"
    try:
        asyncio.run(
            email_service.send_email(
                subject=subject,
                recipient=admin_email,
                template="admin_alert",
                subscriber_email=subscriber_email,
            )
        )
    except NotificationError as e:
        logger.error(f"Admin notification for {subscriber_email} failed: {e}")
        return False
    return True
