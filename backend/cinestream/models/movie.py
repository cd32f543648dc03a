"""
Movie and review database models
"""
from sqlalchemy import (
    Column, Integer, String, Text, Float, Date, DateTime, JSON,
    ForeignKey, UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from cinestream.core.database import Base


class Movie(Base):
    __tablename__ = "movies"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(500), nullable=False)
    description = Column(Text)
    release_date = Column(Date)
    poster_url = Column(String)
    trailer_url = Column(String)
    language = Column(String(50))
    theme = Column(String(100))
    genres = Column(JSON, default=list)  # ordered list of genre names
    actors = Column(JSON, default=list)  # ordered list of actor names
    director = Column(String(200))
    duration = Column(Integer)  # minutes

    # Aggregated rating info, kept in step with the review rows
    rating_average = Column(Float, nullable=False, default=0.0)
    rating_count = Column(Integer, nullable=False, default=0)

    # Optimistic concurrency token, bumped on every review write
    version = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    reviews = relationship(
        "MovieReview",
        back_populates="movie",
        order_by="MovieReview.position",
        cascade="all, delete-orphan",
    )


class MovieReview(Base):
    __tablename__ = "movie_reviews"

    id = Column(Integer, primary_key=True, index=True)
    movie_id = Column(Integer, ForeignKey("movies.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(100), nullable=False)
    rating = Column(Integer, nullable=False)
    comment = Column(Text)
    reviewed_at = Column(DateTime(timezone=True), nullable=False)
    position = Column(Integer, nullable=False)  # persisted sequence order

    movie = relationship("Movie", back_populates="reviews")

    # One review per user per movie
    __table_args__ = (
        UniqueConstraint("movie_id", "user_id", name="unique_movie_reviewer"),
    )
