"""Request and response schemas for categories."""

from typing import Optional

from pydantic import Field

from .common import CamelModel

ICON_PATTERN = r"^https?://\S+$"


class CategoryCreate(CamelModel):
    name: str = Field(..., min_length=3, max_length=20)
    description: Optional[str] = Field(default=None, min_length=10, max_length=500)
    icon: Optional[str] = Field(
        default=None, min_length=10, max_length=500, pattern=ICON_PATTERN
    )


class CategoryUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=3, max_length=20)
    description: Optional[str] = Field(default=None, min_length=10, max_length=500)
    icon: Optional[str] = Field(
        default=None, min_length=10, max_length=500, pattern=ICON_PATTERN
    )


class CategoryResponse(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    icon: Optional[str] = None
