from typing import Any, Dict, Optional
from datetime import datetime
from sqlalchemy import JSON, Column, DateTime
from sqlmodel import SQLModel, Field

from app.models.subscriber_model import utc_now


class Donation(SQLModel, table=True):
    """Donation written by the payment webhook; read-only to this service."""

    __tablename__ = "donation"

    id: str = Field(primary_key=True, max_length=64)
    session_id: str = Field(index=True, unique=True, max_length=255)
    amount: float = Field(default=0.0, description="Amount in major currency units")
    currency: str = Field(default="usd", max_length=8)
    donor_email: Optional[str] = Field(default=None, max_length=320)
    status: str = Field(default="pending", index=True, max_length=32)
    details: Optional[Dict[str, Any]] = Field(
        default=None, sa_column=Column("metadata", JSON, nullable=True)
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        nullable=False,
    )
