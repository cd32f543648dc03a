"""
Movie analytics report rendering
"""
from typing import List, Optional, Sequence
from datetime import datetime
import logging
import re

from cinestream.core.clock import ensure_utc, system_clock
from cinestream.core.config import settings
from cinestream.schemas.analytics import AnalyticsSnapshot
from cinestream.schemas.movie import Movie
from cinestream.schemas.report import (
    KeyValueItem, KeyValueSection, TableSection, ReportDocument
)
from cinestream.services.analytics_service import AnalyticsService
from cinestream.services.movie_store import MovieStore
from cinestream.utils.exceptions import EmptyInput
from cinestream.utils.helpers import truncate_text

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"


def report_filename(movie: Movie, generated_at: datetime) -> str:
    """File name for a text export, e.g. ``The_Matrix_Analytics_Report_1700000000000.txt``"""
    stamp = int(ensure_utc(generated_at).timestamp() * 1000)
    title = re.sub(r"\s+", "_", movie.title.strip())
    return f"{title}_Analytics_Report_{stamp}.txt"


def render_report(
    movie: Movie,
    snapshot: AnalyticsSnapshot,
    generated_at: datetime,
    sample_size: Optional[int] = None,
    comment_length: Optional[int] = None
) -> ReportDocument:
    """
    Lay out a movie's analytics as a fixed sequence of sections.

    Output depends only on the arguments, so the same inputs always give
    the same document apart from the generation time and file name.
    """
    if movie is None or snapshot is None:
        raise EmptyInput("Report requires both a movie and its analytics snapshot")

    sample_size = sample_size if sample_size is not None else settings.REPORT_SAMPLE_SIZE
    comment_length = comment_length if comment_length is not None else settings.COMMENT_PREVIEW_LENGTH
    generated_at = ensure_utc(generated_at)

    sections = [
        KeyValueSection(heading="Report", items=[
            KeyValueItem(label="Title", value=f"Movie Analytics Report: {movie.title}"),
            KeyValueItem(label="Generated on", value=generated_at.strftime("%Y-%m-%d %H:%M:%S UTC")),
        ]),
        KeyValueSection(heading="Movie Information", items=[
            KeyValueItem(label="Title", value=movie.title),
            KeyValueItem(label="Description", value=movie.description or NOT_AVAILABLE),
            KeyValueItem(label="Genre", value=", ".join(movie.genres) or NOT_AVAILABLE),
            KeyValueItem(label="Director", value=movie.director or NOT_AVAILABLE),
            KeyValueItem(
                label="Release Date",
                value=movie.release_date.isoformat() if movie.release_date else NOT_AVAILABLE
            ),
        ]),
        KeyValueSection(heading="Key Metrics", items=[
            KeyValueItem(label="Total Reviews", value=str(snapshot.total_reviews)),
            KeyValueItem(label="Average Rating", value=f"{snapshot.average_rating:.1f}/5"),
            KeyValueItem(
                label=f"Recent Reviews ({snapshot.recent_window_days} days)",
                value=f"{snapshot.recent_reviews} ({snapshot.recent_percentage:.1f}%)"
            ),
            KeyValueItem(label="Active Reviewers", value=str(len(snapshot.top_reviewers))),
        ]),
        TableSection(
            heading="Rating Distribution",
            columns=["Rating", "Count", "Percentage"],
            rows=[
                [f"{bucket.stars} Stars", str(bucket.count), f"{bucket.percentage:.1f}%"]
                for bucket in snapshot.rating_distribution
            ]
        ),
        TableSection(
            heading="Sentiment Analysis",
            columns=["Sentiment", "Count"],
            rows=[
                ["Positive", str(snapshot.sentiment.positive)],
                ["Negative", str(snapshot.sentiment.negative)],
                ["Neutral", str(snapshot.sentiment.neutral)],
            ]
        ),
    ]

    if snapshot.top_reviewers:
        sections.append(TableSection(
            heading="Top Reviewers",
            columns=["Rank", "User ID", "Reviews"],
            rows=[
                [f"#{rank}", reviewer.user_id, str(reviewer.count)]
                for rank, reviewer in enumerate(snapshot.top_reviewers, start=1)
            ]
        ))

    sections.append(TableSection(
        heading="Recent Reviews Sample",
        columns=["#", "User ID", "Rating", "Date", "Comment"],
        rows=[
            [
                f"#{index}",
                review.user_id,
                f"{review.rating}/5",
                ensure_utc(review.reviewed_at).date().isoformat(),
                truncate_text(review.comment, comment_length) if review.comment else "No comment",
            ]
            for index, review in enumerate(movie.reviews[:sample_size], start=1)
        ]
    ))

    return ReportDocument(
        title=f"Movie Analytics Report: {movie.title}",
        generated_at=generated_at,
        filename=report_filename(movie, generated_at),
        sections=sections
    )


def _format_table(columns: Sequence[str], rows: List[List[str]]) -> List[str]:
    widths = [len(column) for column in columns]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def line(cells):
        return " | ".join(cell.ljust(widths[i]) for i, cell in enumerate(cells)).rstrip()

    lines = [line(columns), "-+-".join("-" * width for width in widths)]
    lines.extend(line(row) for row in rows)
    return lines


def render_text(document: ReportDocument) -> str:
    """Plain-text rendering of a report document"""
    lines = [document.title, "=" * len(document.title)]

    for section in document.sections:
        lines.append("")
        lines.append(section.heading)
        lines.append("-" * len(section.heading))
        if isinstance(section, TableSection):
            lines.extend(_format_table(section.columns, section.rows))
        else:
            lines.extend(f"{item.label}: {item.value}" for item in section.items)

    return "\n".join(lines) + "\n"


class ReportService:
    """Service for building movie analytics reports"""

    def __init__(self, store: MovieStore, clock=system_clock, classifier=None):
        self.analytics = AnalyticsService(store, clock=clock, classifier=classifier)

    def build_report(self, movie_id: int) -> ReportDocument:
        """Analytics and report for one snapshot of the movie"""
        movie, snapshot = self.analytics.get_movie_analytics(movie_id)
        document = render_report(movie, snapshot, snapshot.generated_at)

        logger.info(f"Report built for movie {movie_id}: {len(document.sections)} sections")
        return document
