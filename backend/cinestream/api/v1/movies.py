"""
Movie and review endpoints
"""
from typing import Any
from fastapi import APIRouter, Depends, HTTPException, status
import logging

from cinestream.schemas.movie import Movie, MovieCreate
from cinestream.schemas.rating import ReviewSubmit
from cinestream.services.rating_service import RatingService
from cinestream.utils.dependencies import get_rating_service
from cinestream.utils.exceptions import CineStreamException

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=Movie, status_code=status.HTTP_201_CREATED)
def create_movie(
    movie_data: MovieCreate,
    rating_service: RatingService = Depends(get_rating_service)
) -> Any:
    """
    Add a movie to the catalog
    """
    try:
        return rating_service.create_movie(movie_data)

    except CineStreamException:
        raise
    except Exception as e:
        logger.error(f"Error creating movie: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create movie"
        )


@router.get("/{movie_id}", response_model=Movie)
def get_movie(
    movie_id: int,
    rating_service: RatingService = Depends(get_rating_service)
) -> Any:
    """
    Get a movie with its reviews and aggregate rating
    """
    try:
        return rating_service.get_movie(movie_id)

    except CineStreamException:
        raise
    except Exception as e:
        logger.error(f"Error fetching movie {movie_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch movie"
        )


@router.post("/{movie_id}/reviews", response_model=Movie)
def submit_review(
    movie_id: int,
    review_data: ReviewSubmit,
    rating_service: RatingService = Depends(get_rating_service)
) -> Any:
    """
    Create the user's review of a movie, or replace it if one exists
    """
    try:
        return rating_service.submit_review(
            movie_id=movie_id,
            user_id=review_data.user_id,
            rating=review_data.rating,
            comment=review_data.comment
        )

    except CineStreamException:
        raise
    except Exception as e:
        logger.error(f"Error submitting review for movie {movie_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to submit review"
        )
