"""
Service for submitting movie reviews and keeping aggregate ratings consistent
"""
from typing import Optional, Dict, Any
import logging
import math
import numbers

from cinestream.core.clock import system_clock
from cinestream.core.config import settings
from cinestream.core.locks import KeyedLock, review_locks
from cinestream.schemas.movie import Movie, MovieCreate
from cinestream.schemas.rating import Review
from cinestream.services.movie_store import MovieStore
from cinestream.utils.exceptions import ConcurrencyConflict, InvalidInput

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


def validate_rating(rating: Any) -> int:
    """Return the rating as an int in [1, 5] or raise InvalidInput"""
    if rating is None:
        raise InvalidInput("Rating is required")
    if isinstance(rating, bool) or not isinstance(rating, numbers.Real):
        raise InvalidInput("Rating must be a number")
    if not math.isfinite(rating):
        raise InvalidInput("Rating must be a finite number")
    if rating != int(rating):
        raise InvalidInput("Rating must be a whole number of stars")
    if not (MIN_RATING <= rating <= MAX_RATING):
        raise InvalidInput(f"Rating must be between {MIN_RATING} and {MAX_RATING}")
    return int(rating)


def validate_movie_id(movie_id: Any) -> int:
    """Validate movie ID"""
    if isinstance(movie_id, bool) or not isinstance(movie_id, int) or movie_id <= 0:
        raise InvalidInput("Invalid movie ID")
    return movie_id


def validate_user_id(user_id: Any) -> str:
    """Validate reviewer identifier (existence is the caller's concern)"""
    if not isinstance(user_id, str) or not user_id.strip():
        raise InvalidInput("Invalid user ID")
    return user_id


def recalculate_rating(movie: Movie) -> Movie:
    """
    Recompute rating_count and rating_average from the full review list.

    This is an O(n) unweighted mean rebuilt on every write. A running-mean
    update would round differently, so it must be checked against this
    result before replacing it.
    """
    if not movie.reviews:
        movie.rating_count = 0
        movie.rating_average = 0.0
    else:
        movie.rating_count = len(movie.reviews)
        movie.rating_average = sum(r.rating for r in movie.reviews) / movie.rating_count
    return movie


class RatingService:
    """Service for handling review submissions"""

    def __init__(
        self,
        store: MovieStore,
        clock=system_clock,
        locks: KeyedLock = review_locks,
        max_retries: Optional[int] = None
    ):
        self.store = store
        self.clock = clock
        self.locks = locks
        self.max_retries = settings.UPSERT_MAX_RETRIES if max_retries is None else max_retries

    def create_movie(self, movie_data: MovieCreate) -> Movie:
        """Add a movie to the catalog"""
        return self.store.add(movie_data)

    def get_movie(self, movie_id: int) -> Movie:
        """Get a movie with its reviews"""
        return self.store.get(validate_movie_id(movie_id))

    def submit_review(
        self,
        movie_id: int,
        user_id: str,
        rating: Any,
        comment: Optional[str] = None
    ) -> Movie:
        """
        Create or replace ``user_id``'s review of a movie.

        Same-movie submissions are serialized through the keyed lock; the
        store's version check catches writers outside this process, in which
        case the whole read-modify-write is retried up to ``max_retries``
        times before the conflict is raised.
        """
        movie_id = validate_movie_id(movie_id)
        user_id = validate_user_id(user_id)
        rating = validate_rating(rating)

        with self.locks.hold(movie_id):
            attempt = 0
            while True:
                movie = self.store.get(movie_id)
                created = self._apply_review(movie, user_id, rating, comment)
                recalculate_rating(movie)

                try:
                    saved = self.store.put(movie_id, movie)
                except ConcurrencyConflict:
                    if attempt >= self.max_retries:
                        logger.error(f"Giving up on review for movie {movie_id} after {attempt + 1} conflicts")
                        raise
                    attempt += 1
                    logger.warning(f"Concurrent update on movie {movie_id}, retrying review by {user_id}")
                    continue

                action = "created" if created else "updated"
                logger.info(
                    f"Review {action}: User {user_id} rated movie {movie_id} {rating}/5 "
                    f"(average {saved.rating_average:.2f} over {saved.rating_count})"
                )
                return saved

    def _apply_review(self, movie: Movie, user_id: str, rating: int, comment: Optional[str]) -> bool:
        """Upsert into the movie's review list; return True when a review was added"""
        # Index by reviewer, keeping first-seen order. Legacy duplicates
        # collapse into the first slot holding the latest entry.
        by_user: Dict[str, Review] = {}
        for review in movie.reviews:
            by_user[review.user_id] = review

        now = self.clock.now()
        existing = by_user.get(user_id)
        if existing is not None:
            existing.rating = rating
            existing.comment = comment
            existing.reviewed_at = now
        else:
            by_user[user_id] = Review(
                user_id=user_id,
                rating=rating,
                comment=comment,
                reviewed_at=now
            )

        movie.reviews = list(by_user.values())
        return existing is None
