from pydantic import BaseModel
from typing import Literal


class VendorStatusSchema(BaseModel):
    vendor_id: str
    status: Literal["active", "inactive"]


class VerifyVendorSchema(BaseModel):
    vendor_id: str


class VendorLikeSchema(BaseModel):
    vendor_id: str
    like: bool = True


__all__ = ["VendorStatusSchema", "VerifyVendorSchema", "VendorLikeSchema"]
