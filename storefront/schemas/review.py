"""Customer review schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ReviewCreate(BaseModel):
    rating: int = Field(default=5, ge=1, le=5)
    content: str = Field(min_length=1, max_length=2000)


class ReviewResponse(BaseModel):
    id: int
    customer_name: str
    rating: int
    content: str
    is_approved: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
