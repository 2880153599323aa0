from pydantic import BaseModel
from typing import List, Optional


class SlideSchema(BaseModel):
    image: str
    title: Optional[str] = None
    subtitle: Optional[str] = None
    link: Optional[str] = None


class SlideshowSchema(BaseModel):
    enabled: bool = True
    items: List[SlideSchema] = []


__all__ = ["SlideSchema", "SlideshowSchema"]
