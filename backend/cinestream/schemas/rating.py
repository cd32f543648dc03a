"""
Review-related Pydantic schemas
"""
from typing import Any, Optional
from pydantic import BaseModel, Field
from datetime import datetime


class ReviewSubmit(BaseModel):
    """Schema for submitting (creating or replacing) a review"""
    user_id: str = Field(..., max_length=100)
    # Left uncoerced; the rating service accepts only JSON numbers and
    # reports bad values as InvalidInput
    rating: Any = None
    comment: Optional[str] = Field(None, max_length=5000)


class Review(BaseModel):
    """A single reviewer's rating of a movie"""
    user_id: str
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = None
    reviewed_at: datetime

    class Config:
        from_attributes = True
