"""Pytest configuration and fixtures for CineStream tests."""

from datetime import datetime, timezone
from typing import Generator
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from cinestream.core.clock import FixedClock
from cinestream.core.database import Base, get_db
from cinestream.core.locks import KeyedLock
# Import all models to ensure they are registered with Base.metadata
from cinestream.models import Movie as MovieModel, MovieReview  # noqa: F401
from cinestream.schemas.movie import Movie, MovieCreate
from cinestream.schemas.rating import Review
from cinestream.services.movie_store import InMemoryMovieStore
from cinestream.services.rating_service import RatingService
from cinestream.utils.dependencies import get_clock

# Using StaticPool ensures all connections share the same in-memory database
TEST_DATABASE_URL = "sqlite:///:memory:"

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def memory_store(clock) -> InMemoryMovieStore:
    return InMemoryMovieStore(clock=clock)


@pytest.fixture
def rating_service(memory_store, clock) -> RatingService:
    # Private lock registry so tests never share lock state
    return RatingService(memory_store, clock=clock, locks=KeyedLock())


@pytest.fixture
def movie_data() -> MovieCreate:
    return MovieCreate(
        title="The Matrix",
        description="A hacker learns the truth about his reality.",
        genres=["Action", "Science Fiction"],
        actors=["Keanu Reeves", "Carrie-Anne Moss"],
        director="Lana Wachowski",
        duration=136,
        language="English",
    )


@pytest.fixture
def make_movie():
    """Build a movie schema directly, bypassing any store."""

    def _make_movie(reviews=(), movie_id: int = 1, **fields) -> Movie:
        built = []
        for review in reviews:
            if isinstance(review, Review):
                built.append(review)
                continue
            user_id, rating, *rest = review
            comment = rest[0] if len(rest) > 0 else None
            reviewed_at = rest[1] if len(rest) > 1 else NOW
            built.append(Review(user_id=user_id, rating=rating, comment=comment, reviewed_at=reviewed_at))
        fields.setdefault("title", "The Matrix")
        return Movie(id=movie_id, reviews=built, **fields)

    return _make_movie


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a test database session."""
    engine = create_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    session = session_factory()
    try:
        yield session
    finally:
        session.close()
        # Drop all tables after each test
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def client(db_session: Session, clock: FixedClock) -> Generator[TestClient, None, None]:
    """Create a test HTTP client backed by the in-memory database."""
    from cinestream.main import app

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock

    yield TestClient(app)

    app.dependency_overrides.clear()
