"""
Movie-related Pydantic schemas
"""
from typing import Optional, List
from pydantic import BaseModel, Field
from datetime import datetime, date

from cinestream.schemas.rating import Review


class MovieBase(BaseModel):
    """Base movie schema"""
    title: str = Field(..., min_length=1, max_length=500)
    description: Optional[str] = None
    release_date: Optional[date] = None
    poster_url: Optional[str] = None
    trailer_url: Optional[str] = None
    language: Optional[str] = Field(None, max_length=50)
    theme: Optional[str] = Field(None, max_length=100)
    genres: List[str] = []
    actors: List[str] = []
    director: Optional[str] = Field(None, max_length=200)
    duration: Optional[int] = Field(None, gt=0, lt=1000)  # minutes


class MovieCreate(MovieBase):
    """Schema for creating movies"""
    pass


class Movie(MovieBase):
    """Complete movie schema, including its review collection"""
    id: int
    rating_average: float = 0.0
    rating_count: int = 0
    reviews: List[Review] = []
    version: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
