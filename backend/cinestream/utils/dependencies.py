"""
FastAPI dependencies wiring stores and services per request
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from cinestream.core.clock import system_clock
from cinestream.core.config import settings
from cinestream.core.database import get_db
from cinestream.services.analytics_service import AnalyticsService
from cinestream.services.movie_store import MovieStore, SQLMovieStore
from cinestream.services.rating_service import RatingService
from cinestream.services.report_service import ReportService
from cinestream.services.sentiment import get_classifier


def get_movie_store(db: Session = Depends(get_db)) -> MovieStore:
    """Movie store bound to the request's database session"""
    return SQLMovieStore(db)


def get_clock():
    """Clock used for review timestamps and analytics windows"""
    return system_clock


def get_sentiment_classifier():
    """Sentiment classifier selected by configuration"""
    return get_classifier(settings.SENTIMENT_BACKEND)


def get_rating_service(
    store: MovieStore = Depends(get_movie_store),
    clock=Depends(get_clock)
) -> RatingService:
    return RatingService(store, clock=clock)


def get_analytics_service(
    store: MovieStore = Depends(get_movie_store),
    clock=Depends(get_clock),
    classifier=Depends(get_sentiment_classifier)
) -> AnalyticsService:
    return AnalyticsService(store, clock=clock, classifier=classifier)


def get_report_service(
    store: MovieStore = Depends(get_movie_store),
    clock=Depends(get_clock),
    classifier=Depends(get_sentiment_classifier)
) -> ReportService:
    return ReportService(store, clock=clock, classifier=classifier)
