from pydantic import BaseModel, Field
from typing import Optional


class CatalogFiltersSchema(BaseModel):
    search: Optional[str] = None
    category: Optional[str] = None
    price_range: Optional[str] = None
    stock: Optional[str] = None
    sort_by: Optional[str] = None


class UpdateStockSchema(BaseModel):
    product_id: str
    stock: int = Field(..., ge=0)


class DeleteProductSchema(BaseModel):
    product_id: str


__all__ = ["CatalogFiltersSchema", "UpdateStockSchema", "DeleteProductSchema"]
