"""
Pydantic schemas for request/response validation
"""
from cinestream.schemas.rating import ReviewSubmit, Review
from cinestream.schemas.movie import MovieBase, MovieCreate, Movie
from cinestream.schemas.analytics import (
    RatingBucket, MonthlyTrend, TopReviewer, SentimentTally, AnalyticsSnapshot
)
from cinestream.schemas.report import (
    KeyValueItem, KeyValueSection, TableSection, ReportSection, ReportDocument
)

__all__ = [
    # Review schemas
    "ReviewSubmit", "Review",

    # Movie schemas
    "MovieBase", "MovieCreate", "Movie",

    # Analytics schemas
    "RatingBucket", "MonthlyTrend", "TopReviewer", "SentimentTally",
    "AnalyticsSnapshot",

    # Report schemas
    "KeyValueItem", "KeyValueSection", "TableSection", "ReportSection",
    "ReportDocument",
]
