from pydantic import BaseModel


class ChangeLanguageSchema(BaseModel):
    language: str


__all__ = ["ChangeLanguageSchema"]
