"""
SQLAlchemy models
"""
from cinestream.models.movie import Movie, MovieReview

__all__ = ["Movie", "MovieReview"]
