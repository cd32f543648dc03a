"""
Service for movie review analytics and insights
"""
from typing import Optional, List, Dict, Tuple
from collections import Counter
from datetime import datetime, timedelta
import logging
import math

from cinestream.core.clock import ensure_utc, system_clock
from cinestream.core.config import settings
from cinestream.schemas.analytics import (
    AnalyticsSnapshot, RatingBucket, MonthlyTrend, TopReviewer, SentimentTally
)
from cinestream.schemas.movie import Movie
from cinestream.schemas.rating import Review
from cinestream.services.movie_store import MovieStore
from cinestream.services.sentiment import Sentiment, default_classifier, get_classifier
from cinestream.utils.exceptions import EmptyInput

logger = logging.getLogger(__name__)

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def compute_analytics(
    movie: Movie,
    now: datetime,
    classifier=None,
    recent_window_days: Optional[int] = None,
    trend_months: Optional[int] = None,
    top_reviewers_limit: Optional[int] = None
) -> AnalyticsSnapshot:
    """
    Derive the analytics snapshot for ``movie`` as of ``now``.

    Pure: every figure comes from one copy of the review list taken on
    entry, and the clock is an argument.
    """
    if movie is None:
        raise EmptyInput("Movie is required for analytics")

    classifier = classifier or default_classifier
    window = recent_window_days if recent_window_days is not None else settings.RECENT_WINDOW_DAYS
    months = trend_months if trend_months is not None else settings.TREND_MONTHS
    limit = top_reviewers_limit if top_reviewers_limit is not None else settings.TOP_REVIEWERS_LIMIT

    now = ensure_utc(now)
    reviews = list(movie.reviews)
    total_reviews = len(reviews)

    if total_reviews == 0:
        return AnalyticsSnapshot(
            movie_id=movie.id,
            rating_distribution=[RatingBucket(stars=stars) for stars in range(5, 0, -1)],
            recent_window_days=window,
            generated_at=now
        )

    average_rating = sum(r.rating for r in reviews) / total_reviews
    recent_reviews = _count_recent(reviews, now, window)

    return AnalyticsSnapshot(
        movie_id=movie.id,
        total_reviews=total_reviews,
        average_rating=round(average_rating, 1),
        rating_distribution=_rating_distribution(reviews),
        recent_reviews=recent_reviews,
        recent_window_days=window,
        recent_percentage=_percentage(recent_reviews, total_reviews),
        monthly_trends=_monthly_trends(reviews, months),
        top_reviewers=_top_reviewers(reviews, limit),
        sentiment=_sentiment_tally(reviews, classifier),
        generated_at=now
    )


def _percentage(count: int, total: int) -> float:
    return round(count / total * 100, 1) if total else 0.0


def _rating_distribution(reviews: List[Review]) -> List[RatingBucket]:
    """Five buckets, 5 stars first"""
    counts = {stars: 0 for stars in range(1, 6)}
    for review in reviews:
        stars = math.floor(review.rating)
        if stars in counts:
            counts[stars] += 1

    total = len(reviews)
    return [
        RatingBucket(stars=stars, count=counts[stars], percentage=_percentage(counts[stars], total))
        for stars in range(5, 0, -1)
    ]


def _count_recent(reviews: List[Review], now: datetime, window_days: int) -> int:
    window = timedelta(days=window_days)
    return sum(1 for review in reviews if now - ensure_utc(review.reviewed_at) < window)


def _monthly_trends(reviews: List[Review], months: int) -> List[MonthlyTrend]:
    """Per-month volume and mean for the most recent months that have reviews"""
    buckets: Dict[Tuple[int, int], List[int]] = {}
    for review in reviews:
        reviewed_at = ensure_utc(review.reviewed_at)
        buckets.setdefault((reviewed_at.year, reviewed_at.month), []).append(review.rating)

    keys = sorted(buckets)[-months:] if months > 0 else []
    return [
        MonthlyTrend(
            month=f"{MONTH_ABBREVIATIONS[month - 1]} {year % 100:02d}",
            year=year,
            month_number=month,
            reviews=len(buckets[(year, month)]),
            avg_rating=sum(buckets[(year, month)]) / len(buckets[(year, month)])
        )
        for year, month in keys
    ]


def _top_reviewers(reviews: List[Review], limit: int) -> List[TopReviewer]:
    # most_common keeps first-encountered order among equal counts
    counts = Counter(review.user_id for review in reviews)
    return [
        TopReviewer(user_id=user_id, count=count)
        for user_id, count in counts.most_common(limit)
    ]


def _sentiment_tally(reviews: List[Review], classifier) -> SentimentTally:
    tally = Counter(classifier.classify(review.comment) for review in reviews)
    return SentimentTally(
        positive=tally[Sentiment.POSITIVE],
        negative=tally[Sentiment.NEGATIVE],
        neutral=tally[Sentiment.NEUTRAL]
    )


class AnalyticsService:
    """Service for handling movie review analytics"""

    def __init__(self, store: MovieStore, clock=system_clock, classifier=None):
        self.store = store
        self.clock = clock
        self.classifier = classifier or get_classifier(settings.SENTIMENT_BACKEND)

    def get_movie_analytics(self, movie_id: int) -> Tuple[Movie, AnalyticsSnapshot]:
        """Snapshot a movie once and compute its analytics"""
        movie = self.store.get(movie_id)
        snapshot = compute_analytics(movie, self.clock.now(), classifier=self.classifier)

        logger.info(
            f"Analytics computed for movie {movie_id}: {snapshot.total_reviews} reviews, "
            f"{len(snapshot.monthly_trends)} trend months"
        )
        return movie, snapshot
