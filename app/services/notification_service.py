from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from app.core.exceptions import NotificationError
from app.core.logger import logger_manager
from app.schemas.common import NotificationType
from app.tasks.admin_alert_task import admin_alert_task
from app.tasks.welcome_email_task import welcome_email_task


@dataclass(frozen=True)
class Notification:
    type: NotificationType
    recipient: Optional[str]
    payload: Dict[str, Any] = field(default_factory=dict)


class NotificationDispatcher:
    """
    Queues notifications on Celery without waiting for delivery.

    ``dispatch`` never raises: a notification that cannot be queued is logged
    and skipped, and the rest are still submitted.
    """

    def __init__(self, tasks: Optional[Dict[NotificationType, Any]] = None):
        self.tasks = tasks or {
            NotificationType.WELCOME: welcome_email_task,
            NotificationType.ADMIN_ALERT: admin_alert_task,
        }
        self.logger = logger_manager.get_logger(__name__)

    def _task_args(self, notification: Notification) -> tuple:
        if notification.type == NotificationType.ADMIN_ALERT:
            return (notification.recipient, notification.payload.get("subscriber_email"))
        return (notification.recipient,)

    def _submit(self, notification: Notification) -> str:
        task = self.tasks.get(notification.type)
        if task is None:
            raise NotificationError(f"No task registered for {notification.type.value}")
        try:
            result = task.apply_async(args=self._task_args(notification))
        except Exception as e:
            # broker/kombu errors vary by transport
            raise NotificationError(
                f"Could not queue {notification.type.value} notification: {e}"
            ) from e
        return result.id

    def dispatch(self, notifications: List[Notification]) -> List[str]:
        """Queue each notification and return the submitted task ids."""
        task_ids: List[str] = []
        for notification in notifications:
            if not notification.recipient:
                self.logger.warning(
                    f"⚠️ No recipient for {notification.type.value} notification, skipping"
                )
                continue
            try:
                task_ids.append(self._submit(notification))
            except NotificationError as e:
                self.logger.error(f"❌ {e}")
                continue
            self.logger.info(
                f"📧 Queued {notification.type.value} notification for {notification.recipient}"
            )
        return task_ids


notification_dispatcher = NotificationDispatcher()


def get_notification_dispatcher() -> NotificationDispatcher:
    return notification_dispatcher
