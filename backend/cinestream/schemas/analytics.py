"""
Analytics Pydantic schemas
"""
from typing import List
from pydantic import BaseModel
from datetime import datetime


class RatingBucket(BaseModel):
    """Review count for one star value"""
    stars: int
    count: int = 0
    percentage: float = 0.0

    class Config:
        frozen = True


class MonthlyTrend(BaseModel):
    """Review volume and mean rating for one calendar month"""
    month: str  # display label, e.g. "Mar 25"
    year: int
    month_number: int
    reviews: int
    avg_rating: float

    class Config:
        frozen = True


class TopReviewer(BaseModel):
    """Reviewer ranked by number of reviews on a movie"""
    user_id: str
    count: int

    class Config:
        frozen = True


class SentimentTally(BaseModel):
    """Comment sentiment counts"""
    positive: int = 0
    negative: int = 0
    neutral: int = 0

    class Config:
        frozen = True

    @property
    def total(self) -> int:
        return self.positive + self.negative + self.neutral


class AnalyticsSnapshot(BaseModel):
    """Analytics derived from one point-in-time copy of a movie's reviews"""
    movie_id: int
    total_reviews: int = 0
    average_rating: float = 0.0
    rating_distribution: List[RatingBucket] = []  # 5 stars first
    recent_reviews: int = 0
    recent_window_days: int
    recent_percentage: float = 0.0
    monthly_trends: List[MonthlyTrend] = []
    top_reviewers: List[TopReviewer] = []
    sentiment: SentimentTally = SentimentTally()
    generated_at: datetime

    class Config:
        frozen = True
