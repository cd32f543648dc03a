"""
Custom exceptions for the application
"""
from fastapi import status


class CineStreamException(Exception):
    """Base exception for CineStream application"""
    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(CineStreamException):
    """Referenced entity does not exist"""
    status_code = status.HTTP_404_NOT_FOUND


class MovieNotFound(NotFound):
    """Movie not found exception"""

    def __init__(self, movie_id):
        self.movie_id = movie_id
        super().__init__(f"Movie {movie_id} not found")


class InvalidInput(CineStreamException):
    """Rating out of range, malformed identifiers or unknown options"""
    status_code = status.HTTP_400_BAD_REQUEST


class EmptyInput(CineStreamException):
    """Report requested without a movie or analytics snapshot"""
    status_code = status.HTTP_400_BAD_REQUEST


class ConcurrencyConflict(CineStreamException):
    """Optimistic version check failed on write"""
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, movie_id, expected_version=None):
        self.movie_id = movie_id
        self.expected_version = expected_version
        super().__init__(
            f"Movie {movie_id} was modified concurrently "
            f"(expected version {expected_version})"
        )
