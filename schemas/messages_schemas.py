from pydantic import BaseModel
from typing import Optional


class SendMessageSchema(BaseModel):
    recipientId: str
    content: str
    recipientEmail: Optional[str] = None
    type: str = "message"


class MessageIdSchema(BaseModel):
    message_id: str


__all__ = ["SendMessageSchema", "MessageIdSchema"]
