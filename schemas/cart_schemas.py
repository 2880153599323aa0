from pydantic import BaseModel, Field


class AddCartItemSchema(BaseModel):
    # price and vendor come from the stored product
    product_id: str
    quantity: int = Field(1, ge=1)


class RemoveCartItemSchema(BaseModel):
    product_id: str


class UpdateQuantitySchema(BaseModel):
    product_id: str
    quantity: int


__all__ = ["AddCartItemSchema", "RemoveCartItemSchema", "UpdateQuantitySchema"]
