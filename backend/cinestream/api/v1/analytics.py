"""
Movie review analytics and report endpoints
"""
from typing import Any
from fastapi import APIRouter, Depends, HTTPException, status, Query
from fastapi.responses import PlainTextResponse
import logging

from cinestream.schemas.analytics import AnalyticsSnapshot
from cinestream.services.analytics_service import AnalyticsService
from cinestream.services.report_service import ReportService, render_text
from cinestream.utils.dependencies import get_analytics_service, get_report_service
from cinestream.utils.exceptions import CineStreamException

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/{movie_id}/analytics", response_model=AnalyticsSnapshot)
def get_movie_analytics(
    movie_id: int,
    analytics_service: AnalyticsService = Depends(get_analytics_service)
) -> Any:
    """
    Get rating distribution, trends, sentiment and top reviewers for a movie
    """
    try:
        _, snapshot = analytics_service.get_movie_analytics(movie_id)
        return snapshot

    except CineStreamException:
        raise
    except Exception as e:
        logger.error(f"Error computing analytics for movie {movie_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to compute movie analytics"
        )


@router.get("/{movie_id}/report")
def get_movie_report(
    movie_id: int,
    format: str = Query("json", pattern="^(json|text)$", description="Report format"),
    report_service: ReportService = Depends(get_report_service)
) -> Any:
    """
    Export the movie analytics report as a structured document or plain text
    """
    try:
        document = report_service.build_report(movie_id)

        if format == "text":
            return PlainTextResponse(
                render_text(document),
                headers={"Content-Disposition": f'attachment; filename="{document.filename}"'}
            )

        return document

    except CineStreamException:
        raise
    except Exception as e:
        logger.error(f"Error building report for movie {movie_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to build movie report"
        )
