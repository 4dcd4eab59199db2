from contextlib import asynccontextmanager
from typing import Any, List, Optional

from fastapi import Depends
from sqlalchemy import delete, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core.database.mysql import mysql_manager
from app.core.exceptions import StorageError
from app.core.logger import logger_manager
from app.models.subscriber_model import Subscriber, SubscriberStatus, utc_now


class SubscriberCrud:
    """Record store for subscribers, keyed by normalized email or id."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.logger = logger_manager.get_logger(__name__)

    @asynccontextmanager
    async def _storage(self, action: str):
        try:
            yield
        except SQLAlchemyError as e:
            self.logger.exception(f"Subscriber store failed to {action}: {e}")
            await self.db.rollback()
            raise StorageError(f"Failed to {action}") from e

    async def get_subscriber_by_email(self, email: str) -> Optional[Subscriber]:
        async with self._storage("look up subscriber"):
            statement = select(Subscriber).where(Subscriber.email == email)
            result = await self.db.execute(statement)
            return result.scalar_one_or_none()

    async def get_subscriber_by_id(self, subscriber_id: str) -> Optional[Subscriber]:
        async with self._storage("look up subscriber"):
            return await self.db.get(Subscriber, subscriber_id)

    async def get_active_subscribers(self) -> List[Subscriber]:
        """Subscribers not unsubscribed, most recent subscription first."""
        async with self._storage("list subscribers"):
            statement = (
                select(Subscriber)
                .where(Subscriber.status != SubscriberStatus.unsubscribed)
                .order_by(Subscriber.subscribed_at.desc())
            )
            result = await self.db.execute(statement)
            return list(result.scalars().all())

    async def count_active_subscribers(self) -> int:
        async with self._storage("count subscribers"):
            statement = select(func.count()).select_from(Subscriber).where(
                Subscriber.status != SubscriberStatus.unsubscribed
            )
            result = await self.db.execute(statement)
            return int(result.scalar_one())

    async def insert_subscriber(self, subscriber: Subscriber) -> Optional[Subscriber]:
        """
        Insert a new record.

        Returns None when the unique email index rejects the row, i.e. a
        concurrent request created the same subscriber first.
        """
        async with self._storage("create subscriber"):
            self.db.add(subscriber)
            try:
                await self.db.commit()
            except IntegrityError:
                await self.db.rollback()
                self.logger.warning(
                    f"Subscriber {subscriber.email} already exists (unique conflict)"
                )
                return None
            await self.db.refresh(subscriber)
            return subscriber

    async def update_subscriber(self, subscriber: Subscriber, **values: Any) -> Subscriber:
        """Set status/timestamp fields on an existing record in place."""
        async with self._storage("update subscriber"):
            for field, value in values.items():
                setattr(subscriber, field, value)
            subscriber.updated_at = utc_now()
            self.db.add(subscriber)
            await self.db.commit()
            await self.db.refresh(subscriber)
            return subscriber

    async def delete_subscriber_by_id(self, subscriber_id: str) -> bool:
        async with self._storage("delete subscriber"):
            statement = delete(Subscriber).where(Subscriber.id == subscriber_id)
            result = await self.db.execute(statement)
            await self.db.commit()
            return result.rowcount > 0


def get_subscriber_crud(
    db: AsyncSession = Depends(mysql_manager.get_db),
) -> SubscriberCrud:
    return SubscriberCrud(db)
