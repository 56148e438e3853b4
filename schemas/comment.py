from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from schemas.restaurant import CamelModel

MAX_COMMENT_LENGTH = 300


class Comment(CamelModel):
    id: str
    restaurant_id: str
    content: str
    author_name: str
    rating: int
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None


class CommentCreate(CamelModel):
    restaurant_id: str = Field(..., min_length=1)
    content: str = Field(..., max_length=MAX_COMMENT_LENGTH)
    author_name: str
    rating: int = Field(5, ge=1, le=5)
    image_url: Optional[str] = None

    @field_validator("content", "author_name")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()
