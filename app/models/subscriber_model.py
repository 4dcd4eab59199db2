import uuid
from enum import Enum
from typing import Optional
from datetime import datetime, timezone
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def generate_subscriber_id() -> str:
    return uuid.uuid4().hex


class SubscriberStatus(str, Enum):
    active = "active"
    unsubscribed = "unsubscribed"


class Subscriber(SQLModel, table=True):
    """Newsletter subscriber, one row per normalized email."""

    __tablename__ = "subscriber"

    id: str = Field(
        default_factory=generate_subscriber_id, primary_key=True, max_length=32
    )
    email: str = Field(index=True, unique=True, max_length=320)
    status: SubscriberStatus = Field(default=SubscriberStatus.active, index=True)
    subscribed_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        nullable=False,
    )
    # kept after resubscription as a historical trace
    unsubscribed_at: Optional[datetime] = Field(
        default=None,
        sa_type=DateTime(timezone=True),
        nullable=True,
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        nullable=False,
    )
    updated_at: Optional[datetime] = Field(
        default=None,
        sa_type=DateTime(timezone=True),
        nullable=True,
    )

    @property
    def is_active(self) -> bool:
        return self.status == SubscriberStatus.active

    def __str__(self):
        return f"Subscriber(id={self.id}, email={self.email}, status={self.status.value})"
