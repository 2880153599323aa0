from pydantic import BaseModel
from typing import Literal, Optional


ORDER_STATUSES = ("pending", "processing", "shipped", "delivered")


class CustomerInfoSchema(BaseModel):
    name: str = ""
    phone: str = ""
    email: str = ""
    address: str = ""
    details: Optional[str] = ""


class UpdateOrderStatusSchema(BaseModel):
    order_id: str
    status: Literal["pending", "processing", "shipped", "delivered"]


class DeleteOrderSchema(BaseModel):
    order_id: str


__all__ = ["ORDER_STATUSES", "CustomerInfoSchema",
           "UpdateOrderStatusSchema", "DeleteOrderSchema"]
