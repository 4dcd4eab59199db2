from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from app.models.subscriber_model import SubscriberStatus


class EmailSchema(BaseModel):
    email: Optional[str] = Field(None, description="Email address", examples=["reader@example.com"])


class SubscribeResponse(BaseModel):
    success: bool = True
    isNew: bool
    message: str


class SubscriberCountResponse(BaseModel):
    count: int


class SubscriberItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    email: str
    subscribedAt: datetime = Field(validation_alias="subscribed_at")
    status: SubscriberStatus
