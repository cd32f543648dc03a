"""
Review record stores: read-modify-write access to a movie document by id
"""
from abc import ABC, abstractmethod
from threading import Lock
from typing import Dict, List
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.sql import func
import logging

from cinestream.core.clock import ensure_utc, system_clock
from cinestream.models.movie import Movie, MovieReview
from cinestream.schemas.movie import Movie as MovieSchema, MovieCreate
from cinestream.schemas.rating import Review as ReviewSchema
from cinestream.utils.exceptions import (
    CineStreamException, ConcurrencyConflict, MovieNotFound
)

logger = logging.getLogger(__name__)


class MovieStore(ABC):
    """
    Movie persistence as seen by the review engine.

    ``get`` always returns a detached copy, so callers can mutate it freely
    and analytics never observe a write in progress. ``put`` is a single
    atomic write guarded by the movie's ``version``: it succeeds only if the
    stored version still equals ``movie.version`` and bumps it by one.
    """

    @abstractmethod
    def add(self, movie_data: MovieCreate) -> MovieSchema:
        """Create a movie with no reviews"""

    @abstractmethod
    def get(self, movie_id: int) -> MovieSchema:
        """Return a snapshot of the movie or raise MovieNotFound"""

    @abstractmethod
    def put(self, movie_id: int, movie: MovieSchema) -> MovieSchema:
        """Persist reviews and aggregates; raise ConcurrencyConflict on a stale version"""


class InMemoryMovieStore(MovieStore):
    """Document-style store kept in process memory"""

    def __init__(self, clock=system_clock):
        self.clock = clock
        self._lock = Lock()
        self._movies: Dict[int, MovieSchema] = {}
        self._next_id = 1

    def add(self, movie_data: MovieCreate) -> MovieSchema:
        with self._lock:
            movie_id = self._next_id
            self._next_id += 1
            movie = MovieSchema(
                id=movie_id,
                created_at=self.clock.now(),
                **movie_data.model_dump()
            )
            self._movies[movie_id] = movie
            return movie.model_copy(deep=True)

    def get(self, movie_id: int) -> MovieSchema:
        with self._lock:
            movie = self._movies.get(movie_id)
            if movie is None:
                raise MovieNotFound(movie_id)
            return movie.model_copy(deep=True)

    def put(self, movie_id: int, movie: MovieSchema) -> MovieSchema:
        with self._lock:
            current = self._movies.get(movie_id)
            if current is None:
                raise MovieNotFound(movie_id)
            if current.version != movie.version:
                raise ConcurrencyConflict(movie_id, movie.version)

            stored = movie.model_copy(
                deep=True,
                update={
                    "id": movie_id,
                    "version": movie.version + 1,
                    "updated_at": self.clock.now(),
                }
            )
            self._movies[movie_id] = stored
            return stored.model_copy(deep=True)

    def __len__(self) -> int:
        with self._lock:
            return len(self._movies)


class SQLMovieStore(MovieStore):
    """Relational store: one ``movies`` row plus ordered ``movie_reviews`` rows"""

    def __init__(self, db: Session):
        self.db = db

    def add(self, movie_data: MovieCreate) -> MovieSchema:
        try:
            db_movie = Movie(
                **movie_data.model_dump(),
                rating_average=0.0,
                rating_count=0,
                version=0
            )

            self.db.add(db_movie)
            self.db.commit()
            self.db.refresh(db_movie)

            logger.info(f"Movie created: {db_movie.id} ({db_movie.title})")
            return self._to_schema(db_movie)

        except Exception as e:
            logger.error(f"Error creating movie: {e}")
            self.db.rollback()
            raise

    def get(self, movie_id: int) -> MovieSchema:
        # Single joined query so the movie row and its reviews come from one read
        db_movie = self.db.query(Movie).options(
            joinedload(Movie.reviews)
        ).populate_existing().filter(Movie.id == movie_id).first()

        if not db_movie:
            raise MovieNotFound(movie_id)

        return self._to_schema(db_movie)

    def put(self, movie_id: int, movie: MovieSchema) -> MovieSchema:
        try:
            # Compare-and-swap on version; the review rows below commit with it
            updated = self.db.query(Movie).filter(
                Movie.id == movie_id,
                Movie.version == movie.version
            ).update(
                {
                    Movie.title: movie.title,
                    Movie.description: movie.description,
                    Movie.release_date: movie.release_date,
                    Movie.poster_url: movie.poster_url,
                    Movie.trailer_url: movie.trailer_url,
                    Movie.language: movie.language,
                    Movie.theme: movie.theme,
                    Movie.genres: list(movie.genres),
                    Movie.actors: list(movie.actors),
                    Movie.director: movie.director,
                    Movie.duration: movie.duration,
                    Movie.rating_average: movie.rating_average,
                    Movie.rating_count: movie.rating_count,
                    Movie.version: movie.version + 1,
                    Movie.updated_at: func.now(),
                },
                synchronize_session=False
            )

            if updated == 0:
                exists = self.db.query(Movie.id).filter(Movie.id == movie_id).first()
                self.db.rollback()
                if exists is None:
                    raise MovieNotFound(movie_id)
                raise ConcurrencyConflict(movie_id, movie.version)

            self._sync_reviews(movie_id, movie.reviews)
            self.db.commit()

        except CineStreamException:
            raise
        except Exception as e:
            logger.error(f"Error saving reviews for movie {movie_id}: {e}")
            self.db.rollback()
            raise

        return self.get(movie_id)

    def _sync_reviews(self, movie_id: int, reviews: List[ReviewSchema]):
        """Make the review rows match the given sequence, updating rows in place"""
        existing = {
            row.user_id: row
            for row in self.db.query(MovieReview).filter(MovieReview.movie_id == movie_id)
        }

        kept = set()
        for position, review in enumerate(reviews):
            row = existing.get(review.user_id)
            if row is None:
                self.db.add(MovieReview(
                    movie_id=movie_id,
                    user_id=review.user_id,
                    rating=review.rating,
                    comment=review.comment,
                    reviewed_at=review.reviewed_at,
                    position=position
                ))
            else:
                row.rating = review.rating
                row.comment = review.comment
                row.reviewed_at = review.reviewed_at
                row.position = position
            kept.add(review.user_id)

        for user_id, row in existing.items():
            if user_id not in kept:
                self.db.delete(row)

    def _to_schema(self, db_movie: Movie) -> MovieSchema:
        return MovieSchema(
            id=db_movie.id,
            title=db_movie.title,
            description=db_movie.description,
            release_date=db_movie.release_date,
            poster_url=db_movie.poster_url,
            trailer_url=db_movie.trailer_url,
            language=db_movie.language,
            theme=db_movie.theme,
            genres=list(db_movie.genres or []),
            actors=list(db_movie.actors or []),
            director=db_movie.director,
            duration=db_movie.duration,
            rating_average=db_movie.rating_average or 0.0,
            rating_count=db_movie.rating_count or 0,
            version=db_movie.version or 0,
            created_at=db_movie.created_at,
            updated_at=db_movie.updated_at,
            reviews=[
                ReviewSchema(
                    user_id=review.user_id,
                    rating=review.rating,
                    comment=review.comment,
                    reviewed_at=ensure_utc(review.reviewed_at)
                )
                for review in sorted(db_movie.reviews, key=lambda r: r.position)
            ]
        )
