from pydantic import BaseModel
from typing import Optional


class ChatMessageSchema(BaseModel):
    message: str
    vendor_id: Optional[str] = None


class TrainBotSchema(BaseModel):
    passcode: str
    message: str


__all__ = ["ChatMessageSchema", "TrainBotSchema"]
