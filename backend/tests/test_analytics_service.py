"""Tests for review analytics computation."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from cinestream.schemas.rating import Review
from cinestream.services.analytics_service import AnalyticsService, compute_analytics
from cinestream.services.sentiment import Sentiment
from cinestream.utils.exceptions import EmptyInput, MovieNotFound


def month_start(year, month, day=10):
    return datetime(year, month, day, 9, 30, tzinfo=timezone.utc)


class TestEmptyMovie:

    def test_zero_reviews_yield_zeroed_snapshot(self, make_movie, now):
        snapshot = compute_analytics(make_movie(), now)

        assert snapshot.total_reviews == 0
        assert snapshot.average_rating == 0
        assert [b.stars for b in snapshot.rating_distribution] == [5, 4, 3, 2, 1]
        assert all(b.count == 0 and b.percentage == 0 for b in snapshot.rating_distribution)
        assert snapshot.recent_reviews == 0
        assert snapshot.recent_percentage == 0
        assert snapshot.monthly_trends == []
        assert snapshot.top_reviewers == []
        assert snapshot.sentiment.total == 0
        assert snapshot.generated_at == now

    def test_missing_movie(self, now):
        with pytest.raises(EmptyInput):
            compute_analytics(None, now)


class TestRatingDistribution:

    def test_counts_and_percentages(self, make_movie, now):
        movie = make_movie([("u1", 5), ("u2", 4), ("u3", 4)])

        snapshot = compute_analytics(movie, now)
        by_stars = {b.stars: b for b in snapshot.rating_distribution}

        assert by_stars[5].count == 1
        assert by_stars[5].percentage == 33.3
        assert by_stars[4].count == 2
        assert by_stars[4].percentage == 66.7
        assert by_stars[1].count == 0

    def test_sum_laws(self, make_movie, now):
        ratings = [5, 5, 4, 3, 3, 3, 2, 1, 1, 4, 5]
        movie = make_movie([(f"u{i}", r) for i, r in enumerate(ratings)])

        snapshot = compute_analytics(movie, now)

        assert sum(b.count for b in snapshot.rating_distribution) == snapshot.total_reviews
        assert sum(b.percentage for b in snapshot.rating_distribution) == pytest.approx(100, abs=0.5)

    def test_out_of_range_ratings_are_ignored(self, make_movie, now):
        odd = Review.model_construct(user_id="x", rating=7, comment=None, reviewed_at=now)
        fractional = Review.model_construct(user_id="y", rating=4.7, comment=None, reviewed_at=now)
        movie = make_movie([("u1", 3), odd, fractional])

        snapshot = compute_analytics(movie, now)
        by_stars = {b.stars: b.count for b in snapshot.rating_distribution}

        assert by_stars == {5: 0, 4: 1, 3: 1, 2: 0, 1: 0}

    def test_average_is_rounded_to_one_decimal(self, make_movie, now):
        movie = make_movie([("u1", 5), ("u2", 4), ("u3", 4)])

        assert compute_analytics(movie, now).average_rating == 4.3


class TestRecency:

    def test_trailing_window_is_exclusive(self, make_movie, now):
        movie = make_movie([
            ("u1", 4, None, now - timedelta(days=29)),
            ("u2", 4, None, now - timedelta(days=30)),
            ("u3", 4, None, now - timedelta(days=31)),
        ])

        snapshot = compute_analytics(movie, now)

        assert snapshot.recent_reviews == 1
        assert snapshot.recent_percentage == 33.3
        assert snapshot.recent_window_days == 30

    def test_naive_timestamps_are_treated_as_utc(self, make_movie, now):
        naive = (now - timedelta(days=1)).replace(tzinfo=None)
        movie = make_movie([("u1", 4, None, naive)])

        assert compute_analytics(movie, now).recent_reviews == 1

    def test_clock_is_an_input(self, make_movie, now):
        movie = make_movie([("u1", 4, None, now)])

        assert compute_analytics(movie, now).recent_reviews == 1
        assert compute_analytics(movie, now + timedelta(days=45)).recent_reviews == 0


class TestMonthlyTrends:

    def test_keeps_last_six_months(self, make_movie, now):
        months = [(2024, 12), (2025, 1), (2025, 2), (2025, 3), (2025, 4), (2025, 5), (2025, 6)]
        ratings = [1, 2, 3, 4, 5, 4, 3]
        movie = make_movie([
            (f"u{i}", rating, None, month_start(year, month))
            for i, ((year, month), rating) in enumerate(zip(months, ratings))
        ])

        trends = compute_analytics(movie, now).monthly_trends

        assert len(trends) == 6
        assert [t.month for t in trends] == ["Jan 25", "Feb 25", "Mar 25", "Apr 25", "May 25", "Jun 25"]
        assert all(t.reviews == 1 for t in trends)
        assert [t.avg_rating for t in trends] == [2, 3, 4, 5, 4, 3]

    def test_groups_by_month_and_skips_empty_months(self, make_movie, now):
        movie = make_movie([
            ("u1", 5, None, month_start(2025, 3, 1)),
            ("u2", 2, None, month_start(2024, 11, 20)),
            ("u3", 4, None, month_start(2025, 3, 28)),
        ])

        trends = compute_analytics(movie, now).monthly_trends

        assert [(t.year, t.month_number) for t in trends] == [(2024, 11), (2025, 3)]
        assert trends[0].month == "Nov 24"
        assert trends[1].reviews == 2
        assert trends[1].avg_rating == 4.5


class TestTopReviewers:

    def test_five_distinct_reviewers_after_an_update(self, rating_service, movie_data, clock):
        movie = rating_service.create_movie(movie_data)
        for user_id in ("u1", "u2", "u3", "u4", "u5"):
            rating_service.submit_review(movie.id, user_id, 4)
        clock.advance(timedelta(days=1))
        rating_service.submit_review(movie.id, "u3", 2)

        snapshot = compute_analytics(rating_service.get_movie(movie.id), clock.now())

        assert [r.user_id for r in snapshot.top_reviewers] == ["u1", "u2", "u3", "u4", "u5"]
        assert all(r.count == 1 for r in snapshot.top_reviewers)

    def test_ranked_by_count_with_first_seen_tie_break(self, make_movie, now):
        # Legacy data may hold repeat reviewers
        movie = make_movie([
            ("a", 3), ("b", 3), ("c", 3), ("b", 3), ("d", 3),
            ("e", 3), ("f", 3), ("c", 3), ("g", 3),
        ])

        top = compute_analytics(movie, now).top_reviewers

        assert [(r.user_id, r.count) for r in top] == [("b", 2), ("c", 2), ("a", 1), ("d", 1), ("e", 1)]


class TestSentimentTally:

    def test_tally_covers_every_review(self, make_movie, now):
        movie = make_movie([
            ("u1", 5, "I loved this, amazing film"),
            ("u2", 1, "boring and terrible"),
            ("u3", 3, "it was okay"),
            ("u4", 3, "loved the start but terrible ending"),
            ("u5", 4, None),
        ])

        sentiment = compute_analytics(movie, now).sentiment

        assert (sentiment.positive, sentiment.negative, sentiment.neutral) == (1, 1, 3)
        assert sentiment.total == 5 == compute_analytics(movie, now).total_reviews

    def test_classifier_is_swappable(self, make_movie, now):
        class AlwaysNegative:
            def classify(self, comment):
                return Sentiment.NEGATIVE

        movie = make_movie([("u1", 5, "masterpiece"), ("u2", 5, "perfect")])

        sentiment = compute_analytics(movie, now, classifier=AlwaysNegative()).sentiment

        assert sentiment.negative == 2
        assert sentiment.positive == 0


class TestSnapshot:

    def test_is_deterministic(self, make_movie, now):
        movie = make_movie([("u1", 5, "great"), ("u2", 2, "poor", now - timedelta(days=40))])

        assert compute_analytics(movie, now) == compute_analytics(movie, now)

    def test_is_immutable(self, make_movie, now):
        snapshot = compute_analytics(make_movie([("u1", 5)]), now)

        with pytest.raises(ValidationError):
            snapshot.total_reviews = 10

    def test_does_not_mutate_movie(self, make_movie, now):
        movie = make_movie([("u1", 5), ("u2", 3)])
        before = movie.model_dump()

        compute_analytics(movie, now)

        assert movie.model_dump() == before


class TestAnalyticsService:

    def test_reads_store_with_injected_clock(self, memory_store, rating_service, movie_data, clock):
        movie = rating_service.create_movie(movie_data)
        rating_service.submit_review(movie.id, "u1", 5, "brilliant")
        clock.advance(timedelta(days=60))

        service = AnalyticsService(memory_store, clock=clock)
        fetched, snapshot = service.get_movie_analytics(movie.id)

        assert fetched.id == movie.id
        assert snapshot.total_reviews == 1
        assert snapshot.recent_reviews == 0
        assert snapshot.generated_at == clock.now()

    def test_unknown_movie(self, memory_store, clock):
        with pytest.raises(MovieNotFound):
            AnalyticsService(memory_store, clock=clock).get_movie_analytics(42)
