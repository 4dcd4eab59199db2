from .welcome_email_task import welcome_email_task
from .admin_alert_task import admin_alert_task

__all__ = [
    "welcome_email_task",
    "admin_alert_task",
]
