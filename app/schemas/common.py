from pydantic import BaseModel
from enum import Enum


class SuccessResponse(BaseModel):
    success: bool = True
    message: str


class NotificationType(str, Enum):
    WELCOME = "welcome"
    ADMIN_ALERT = "admin_alert"
