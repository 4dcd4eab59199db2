import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from fastapi import Depends

from app.core.config.settings import settings
from app.core.exceptions import InvalidInput
from app.core.logger import logger_manager
from app.crud.subscriber_crud import get_subscriber_crud, SubscriberCrud
from app.models.subscriber_model import Subscriber, SubscriberStatus, utc_now
from app.schemas.common import NotificationType
from app.services.notification_service import Notification


EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class SubscribeOutcome(str, Enum):
    CREATED = "created"
    RESUBSCRIBED = "resubscribed"
    ALREADY_ACTIVE = "already_active"


OUTCOME_MESSAGES = {
    SubscribeOutcome.CREATED: "Successfully subscribed! Welcome email will be sent shortly.",
    SubscribeOutcome.RESUBSCRIBED: "Welcome back! You have been resubscribed.",
    SubscribeOutcome.ALREADY_ACTIVE: "You are already subscribed to our newsletter!",
}


@dataclass
class ReconcileResult:
    outcome: SubscribeOutcome
    record: Optional[Subscriber]
    notifications: List[Notification] = field(default_factory=list)

    @property
    def is_new(self) -> bool:
        return self.outcome != SubscribeOutcome.ALREADY_ACTIVE

    @property
    def message(self) -> str:
        return OUTCOME_MESSAGES[self.outcome]


@dataclass
class UnsubscribeResult:
    found: bool


def normalize_email(raw_email: Any) -> str:
    """Validate an address and return its lookup key (trimmed, lower-cased)."""
    if not isinstance(raw_email, str) or not raw_email.strip():
        raise InvalidInput("Email address is required")
    email = raw_email.strip()
    if not EMAIL_PATTERN.match(email):
        raise InvalidInput("Invalid email address format")
    return email.lower()


class SubscriberService:
    def __init__(self, subscriber_crud: SubscriberCrud, admin_email: Optional[str] = None):
        self.subscriber_crud = subscriber_crud
        self.admin_email = admin_email
        self.logger = logger_manager.get_logger(__name__)

    def _notifications_for(self, email: str) -> List[Notification]:
        return [
            Notification(type=NotificationType.WELCOME, recipient=email),
            Notification(
                type=NotificationType.ADMIN_ALERT,
                recipient=self.admin_email,
                payload={"subscriber_email": email},
            ),
        ]

    async def reconcile(self, raw_email: Any) -> ReconcileResult:
        """
        Decide and persist the subscription state for ``raw_email``.

        Writes at most once. The returned notifications are for the caller to
        dispatch; nothing here waits on delivery.
        """
        email = normalize_email(raw_email)
        existing = await self.subscriber_crud.get_subscriber_by_email(email)

        if existing is None:
            created = await self.subscriber_crud.insert_subscriber(
                Subscriber(email=email, status=SubscriberStatus.active, subscribed_at=utc_now())
            )
            if created is None:
                # lost a race with a concurrent subscribe for the same address
                self.logger.info(f"⚠️ Concurrent subscription detected for {email}")
                winner = await self.subscriber_crud.get_subscriber_by_email(email)
                return ReconcileResult(SubscribeOutcome.ALREADY_ACTIVE, winner)
            self.logger.info(f"✅ New subscriber added: {email}")
            return ReconcileResult(
                SubscribeOutcome.CREATED, created, self._notifications_for(email)
            )

        if existing.status == SubscriberStatus.unsubscribed:
            record = await self.subscriber_crud.update_subscriber(
                existing, status=SubscriberStatus.active, subscribed_at=utc_now()
            )
            self.logger.info(f"♻️ Resubscribed user: {email}")
            return ReconcileResult(
                SubscribeOutcome.RESUBSCRIBED, record, self._notifications_for(email)
            )

        self.logger.info(f"User already subscribed: {email}")
        return ReconcileResult(SubscribeOutcome.ALREADY_ACTIVE, existing)

    async def unsubscribe(self, raw_email: Any) -> UnsubscribeResult:
        """Mark the address unsubscribed. Unknown addresses are not an error."""
        if not isinstance(raw_email, str) or not raw_email.strip():
            raise InvalidInput("Email is required")
        email = raw_email.strip().lower()

        existing = await self.subscriber_crud.get_subscriber_by_email(email)
        if existing is None:
            return UnsubscribeResult(found=False)

        await self.subscriber_crud.update_subscriber(
            existing, status=SubscriberStatus.unsubscribed, unsubscribed_at=utc_now()
        )
        self.logger.info(f"👋 User unsubscribed: {email}")
        return UnsubscribeResult(found=True)

    async def count_active_subscribers(self) -> int:
        return await self.subscriber_crud.count_active_subscribers()

    async def get_active_subscribers(self) -> List[Subscriber]:
        return await self.subscriber_crud.get_active_subscribers()

    async def remove_subscriber(self, subscriber_id: str) -> bool:
        removed = await self.subscriber_crud.delete_subscriber_by_id(subscriber_id)
        if removed:
            self.logger.info(f"🗑️ Removed subscriber with ID: {subscriber_id}")
        return removed


def get_subscriber_service(
    subscriber_crud: SubscriberCrud = Depends(get_subscriber_crud),
) -> SubscriberService:
    return SubscriberService(
        subscriber_crud=subscriber_crud, admin_email=settings.admin.ADMIN_EMAIL
    )
