"""
Verify the SMTP configuration: open a connection, then send a test message
to ADMIN_EMAIL (or the sender address when no admin address is set).

    ENV=production python -m script.check_email
"""
import asyncio
import sys

from app.core.config.settings import settings
from app.core.exceptions import NotificationError
from app.core.logger import logger_manager
from app.utils.email import email_service

logger = logger_manager.get_logger(__name__)


async def check_email() -> bool:
    if not email_service.is_configured:
        logger.error("❌ EMAIL_HOST_USER / EMAIL_HOST_PASSWORD are not set")
        return False

    logger.info(f"🧪 Testing SMTP configuration on {settings.email.EMAIL_HOST}:{settings.email.EMAIL_PORT}...")
    if not email_service.test_connection():
        logger.error("❌ SMTP connection failed. Check your SMTP credentials.")
        return False

    recipient = settings.admin.ADMIN_EMAIL or settings.email.sender_address
    try:
        await email_service.send_email(
            subject=f"SMTP Test - {settings.app.APP_NAME}",
            recipient=recipient,
            template="smtp_test",
            email_host=settings.email.EMAIL_HOST,
            email_port=settings.email.EMAIL_PORT,
        )
    except NotificationError as e:
        logger.error(f"❌ SMTP connection OK but sending failed: {e}")
        return False

    logger.info(f"✅ SMTP test successful, check the inbox of {recipient}")
    return True


if __name__ == "__main__":
    logger_manager.setup()
    sys.exit(0 if asyncio.run(check_email()) else 1)
