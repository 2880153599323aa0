from pydantic import BaseModel
from typing import Literal


class CustomOrderStatusSchema(BaseModel):
    order_id: str
    status: Literal["pending", "processing", "completed", "cancelled"]


__all__ = ["CustomOrderStatusSchema"]
