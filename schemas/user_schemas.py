from pydantic import BaseModel
from typing import Optional


class RegisterSchema(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    password: str = ""
    confirm_password: str = ""
    address: Optional[str] = None


class SignInSchema(BaseModel):
    email: str
    password: str
    remember: bool = False


class EmailSchema(BaseModel):
    email: str


class ResetPasswordSchema(BaseModel):
    token: str
    password: str = ""
    confirm_password: str = ""


class EditDetailsSchema(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class FavoriteSchema(BaseModel):
    product_id: str


__all__ = ["RegisterSchema", "SignInSchema", "EmailSchema",
           "ResetPasswordSchema", "EditDetailsSchema", "FavoriteSchema"]
