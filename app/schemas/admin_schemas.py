from typing import Optional
from pydantic import BaseModel, Field


class AdminLoginRequest(BaseModel):
    password: Optional[str] = Field(None, description="Admin shared secret")


class AdminLoginResponse(BaseModel):
    success: bool
    message: str
