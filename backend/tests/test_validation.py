"""Tests for field coercion rules and error aggregation."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from backend.yts.errors import (  # noqa: E402
    CompositeError,
    FieldValidationError,
    FilterValidationError,
    PreconditionError,
    RecordValidationError,
)
from backend.yts.filters import (  # noqa: E402
    MovieDetailsFilters,
    SearchMoviesFilters,
    default_search_movies_filters,
)
from backend.yts.models import (  # noqa: E402
    CommentsPageMeta,
    SiteMovie,
    SiteMovieComment,
    SiteMovieReview,
    SiteUpcomingMovie,
)
from backend.yts.validation import RATING_PATTERN, validate_record  # noqa: E402


def _movie(**overrides: object) -> dict[str, object]:
    raw: dict[str, object] = {
        "title": "Superbad",
        "year": "2007",
        "link": "https://yts.mx/movies/superbad-2007",
        "image": "/assets/images/movies/superbad_2007/medium-cover.jpg",
        "genres": ["Action", "Comedy"],
        "rating": "7.6 / 10",
    }
    raw.update(overrides)
    return raw


@pytest.mark.parametrize("rating", ["7.6 / 10", "10 / 10", "0 / 10", "9.25 / 10", "10.0 / 10"])
def test_rating_pattern_accepts_well_formed_ratings(rating: str) -> None:
    assert RATING_PATTERN.fullmatch(rating)


@pytest.mark.parametrize(
    "rating",
    ["7.6/10", "11 / 10", "7.6  /  10", "7. / 10", "10.5 / 10", "seven", "7.6 / 10\n", "\u0667 / 10"],
)
def test_rating_pattern_rejects_malformed_ratings(rating: str) -> None:
    assert RATING_PATTERN.fullmatch(rating) is None


def test_valid_movie_record_coerces_year_from_first_token() -> None:
    movie = validate_record(SiteMovie, _movie(year="2007 1080p"))

    assert movie.year == 2007
    assert movie.genres == ["Action", "Comedy"]
    assert movie.rating == "7.6 / 10"


def test_missing_rating_is_allowed_on_movie_cards() -> None:
    movie = validate_record(SiteMovie, _movie(rating=""))

    assert movie.rating is None


def test_every_missing_mandatory_field_is_reported() -> None:
    with pytest.raises(RecordValidationError) as excinfo:
        validate_record(SiteMovie, _movie(title="", link="", image=""))

    error = excinfo.value
    assert error.record == "SiteMovie"
    assert error.fields == ["title", "link", "image"]
    assert {entry.rule for entry in error.errors} == {"required"}


def test_field_errors_carry_rule_value_and_expectation() -> None:
    with pytest.raises(RecordValidationError) as excinfo:
        validate_record(
            SiteMovie,
            _movie(year="abc", link="movies/superbad", genres=["Action", "Cooking"], rating="7.6/10"),
        )

    assert excinfo.value.errors == [
        FieldValidationError("SiteMovie", "year", "integer", "abc", "base-10 integer"),
        FieldValidationError("SiteMovie", "link", "url", "movies/superbad", "absolute URL"),
        FieldValidationError(
            "SiteMovie",
            "genres[1]",
            "membership",
            "Cooking",
            excinfo.value.errors[2].expected,
        ),
        FieldValidationError(
            "SiteMovie", "rating", "rating", "7.6/10", '"<number>[.<number>] / 10"'
        ),
    ]
    assert "Comedy" in excinfo.value.errors[2].expected


def test_genre_membership_is_case_sensitive() -> None:
    with pytest.raises(RecordValidationError) as excinfo:
        validate_record(SiteMovie, _movie(genres=["action"]))

    assert excinfo.value.fields == ["genres[0]"]


def test_year_must_be_positive() -> None:
    with pytest.raises(RecordValidationError) as excinfo:
        validate_record(SiteMovie, _movie(year="0"))

    entry = excinfo.value.errors[0]
    assert (entry.field, entry.rule, entry.expected) == ("year", "range", "> 0")


@pytest.mark.parametrize("year", ["2_007", "２００７", "٢٠٠٧", "2007.0", "+-2007"])
def test_year_accepts_only_ascii_base10_digits(year: str) -> None:
    with pytest.raises(RecordValidationError) as excinfo:
        validate_record(SiteMovie, _movie(year=year))

    assert excinfo.value.errors == [
        FieldValidationError("SiteMovie", "year", "integer", year, "base-10 integer")
    ]


def test_review_rating_with_trailing_newline_is_rejected() -> None:
    with pytest.raises(RecordValidationError) as excinfo:
        validate_record(
            SiteMovieReview,
            {"author": "critic", "title": "Fine", "content": "It was fine.", "rating": "7.6 / 10\n"},
        )

    assert [(e.field, e.rule, e.value) for e in excinfo.value.errors] == [
        ("rating", "rating", "7.6 / 10\n")
    ]


def test_reported_value_is_the_raw_input() -> None:
    with pytest.raises(RecordValidationError) as excinfo:
        validate_record(SiteMovie, _movie(year="-5 TBA", genres=["Action", "Cooking"]))

    assert [(e.field, e.value) for e in excinfo.value.errors] == [
        ("year", "-5 TBA"),
        ("genres[1]", "Cooking"),
    ]


def test_upcoming_progress_out_of_range_names_only_progress() -> None:
    raw = _movie(progress="128", quality="1080p")
    raw.pop("rating")

    with pytest.raises(RecordValidationError) as excinfo:
        validate_record(SiteUpcomingMovie, raw)

    assert excinfo.value.errors == [
        FieldValidationError("SiteUpcomingMovie", "progress", "range", "128", "<= 100")
    ]


def test_upcoming_quality_must_be_a_known_resolution() -> None:
    raw = _movie(progress="40", quality="4K")
    raw.pop("rating")

    with pytest.raises(RecordValidationError) as excinfo:
        validate_record(SiteUpcomingMovie, raw)

    entry = excinfo.value.errors[0]
    assert (entry.field, entry.rule) == ("quality", "membership")
    assert entry.expected == "480p 720p 1080p 1080p.x265 2160p 3D"


def test_review_rating_is_mandatory() -> None:
    with pytest.raises(RecordValidationError) as excinfo:
        validate_record(
            SiteMovieReview,
            {"author": "critic", "title": "Fine", "content": "It was fine.", "rating": ""},
        )

    assert [(e.field, e.rule) for e in excinfo.value.errors] == [("rating", "required")]


def test_comment_like_count_defaults_to_zero() -> None:
    comment = validate_record(
        SiteMovieComment,
        {
            "author": "movielover",
            "avatar_url": "https://yts.mx/assets/images/users/thumb/default_thumb.jpg",
            "timestamp": "2 days ago",
            "content": "Great movie",
            "like_count": "",
        },
    )

    assert comment.like_count == 0


def test_comments_page_meta_requires_a_positive_movie_id() -> None:
    with pytest.raises(RecordValidationError) as excinfo:
        validate_record(CommentsPageMeta, {"movie_id": "", "total_count": "12"})

    assert [(e.field, e.rule) for e in excinfo.value.errors] == [("movie_id", "required")]


def test_record_validation_error_renders_one_line_per_field() -> None:
    with pytest.raises(RecordValidationError) as excinfo:
        validate_record(SiteMovie, _movie(title="", image=""))

    lines = str(excinfo.value).splitlines()
    assert lines == [
        'failed validation for "SiteMovie.title" field\'s "required:non-empty value" rule, '
        "provided value ''",
        'failed validation for "SiteMovie.image" field\'s "required:non-empty value" rule, '
        "provided value ''",
    ]


def test_records_are_immutable() -> None:
    movie = validate_record(SiteMovie, _movie())

    with pytest.raises(ValidationError):
        movie.title = "Other"  # type: ignore[misc]


def test_composite_error_requires_entries() -> None:
    with pytest.raises(ValueError):
        CompositeError([])


def test_default_search_filters_query_string() -> None:
    filters = default_search_movies_filters()

    assert filters.query_string() == (
        "genre=all&limit=20&order_by=desc&page=1&quality=all&sort_by=date_added"
    )


def test_search_filters_encode_query_term_and_flags() -> None:
    filters = SearchMoviesFilters(query_term="the matrix", minimum_rating=7, with_rt_ratings=True)

    assert filters.query_string() == (
        "genre=all&limit=20&minimum_rating=7&order_by=desc&page=1&quality=all"
        "&query_term=the+matrix&sort_by=date_added&with_rt_ratings=true"
    )


def test_movie_details_filters_query_string() -> None:
    assert MovieDetailsFilters().query_string() == "with_cast=true&with_images=true"
    assert MovieDetailsFilters(with_images=False, with_cast=False).query_string() == ""


def test_invalid_search_filters_report_every_field() -> None:
    filters = SearchMoviesFilters(
        limit=0, page=0, quality="", minimum_rating=10, genre="", sort_by="", order_by=""
    )

    with pytest.raises(FilterValidationError) as excinfo:
        filters.query_string()

    error = excinfo.value
    assert isinstance(error, PreconditionError)
    assert error.record == "SearchMoviesFilters"
    assert [(e.field, e.rule) for e in error.errors] == [
        ("limit", "range"),
        ("page", "range"),
        ("quality", "membership"),
        ("minimum_rating", "range"),
        ("genre", "membership"),
        ("sort_by", "membership"),
        ("order_by", "membership"),
    ]
    assert error.errors[0].expected == ">= 1"
    assert error.errors[3].expected == "<= 9"
