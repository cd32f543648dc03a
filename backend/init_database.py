"""
Database initialization script
Creates database tables and a sample catalog entry
"""
import logging
import os
import sys

# Add error handling for configuration loading
try:
    from cinestream.core.database import SessionLocal, create_tables
    from cinestream.models import Movie
    from cinestream.schemas.movie import MovieCreate
    from cinestream.services.movie_store import SQLMovieStore
except ImportError as e:
    print(f"Import error: {e}")
    print("Please check your .env file configuration")
    sys.exit(1)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SAMPLE_MOVIE = MovieCreate(
    title="The Shawshank Redemption",
    description="Two imprisoned men bond over a number of years.",
    language="English",
    theme="Hope",
    genres=["Drama"],
    actors=["Tim Robbins", "Morgan Freeman"],
    director="Frank Darabont",
    duration=142,
)


def init_db():
    """Initialize database with tables and initial data"""
    try:
        env_file = ".env"
        if not os.path.exists(env_file):
            logger.warning(f"{env_file} not found. Using default configuration.")

        logger.info("Creating database tables...")
        create_tables()

        db = SessionLocal()
        try:
            if db.query(Movie).count() == 0:
                logger.info("Adding sample movie...")
                SQLMovieStore(db).add(SAMPLE_MOVIE)
            else:
                logger.info("Database already has movies")
        finally:
            db.close()

        logger.info("Database initialization completed!")

    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    init_db()
