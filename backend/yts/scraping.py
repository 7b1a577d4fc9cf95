"""HTML extraction for YTS pages that have no API endpoint.

Each ``scrape_*`` record function turns one fragment (a BeautifulSoup ``Tag``)
into a validated record. Selectors that match nothing produce an empty raw
value, so a missing element surfaces as a ``required`` failure of that field
rather than aborting the rest of the fragment. :func:`scrape_listing` applies a
record function to every fragment of a selection and rejects the whole listing
if any fragment fails, after reporting every failing fragment by index.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

from bs4 import BeautifulSoup, Tag

from .errors import ItemScrapingError, ListingError, RecordValidationError, StructuralError
from .models import (
    CommentsPageMeta,
    HomePageContentData,
    MovieDirectorData,
    MovieReviewsData,
    SiteMovie,
    SiteMovieComment,
    SiteMovieDirector,
    SiteMovieReview,
    SiteUpcomingMovie,
    TrendingMoviesData,
)
from .validation import validate_record

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")

HTML_PARSER = "html.parser"

TRENDING_CSS = "div.browse-movie-wrap"
POPULAR_CSS = "div#popular-downloads div.browse-movie-wrap"
LATEST_CSS = "div.content-dark div.home-movies div.browse-movie-wrap"
UPCOMING_CSS = "div.content-dark ~ div.home-content div.browse-movie-wrap"
DIRECTOR_CSS = "div#movie-content div#movie-sub-info div#crew div.directors"
REVIEWS_CSS = "div#movie-reviews div.review"
REVIEWS_MORE_CSS = "div#movie-reviews a.more-reviews"
MOVIE_INFO_CSS = "div#movie-info"
COMMENTS_SECTION_CSS = "div#movie-comments"
COMMENTS_CSS = "li.comment"

MOVIE_BOTTOM_CSS = "div.browse-movie-bottom"
MOVIE_LINK_CSS = "a.browse-movie-link"
MOVIE_YEAR_CSS = "div.browse-movie-year"
MOVIE_TITLE_CSS = "a.browse-movie-title"
MOVIE_RATING_CSS = "h4.rating"
MOVIE_GENRE_CSS = "h4:not(.rating)"
MOVIE_PROGRESS_CSS = "progress"

DIRECTOR_THUMB_CSS = "div.list-cast a.avatar-thumb img"
DIRECTOR_NAME_CSS = "div.list-cast-info a.name-cast span span"

REVIEW_RATING_CSS = "div.review-properties span.review-rating"
REVIEW_AUTHOR_CSS = "div.review-properties span.review-author"
REVIEW_TITLE_CSS = "h4"
REVIEW_CONTENT_CSS = "article"

MOVIE_ID_ATTR = "data-movie-id"
COMMENT_COUNT_CSS = "h3 span.comment-count"
COMMENT_AUTHOR_CSS = "span.comment-author"
COMMENT_AVATAR_CSS = "img.avatar-thumb"
COMMENT_TIME_CSS = "span.comment-time"
COMMENT_CONTENT_CSS = "div.comment-text"
COMMENT_LIKES_CSS = "span.comment-likes"


def parse_document(markup: str | bytes) -> BeautifulSoup:
    """Parse raw HTML into a document the scrapers can query."""

    return BeautifulSoup(markup, HTML_PARSER)


def _text(root: Tag, selector: str) -> str:
    element = root.select_one(selector)
    if element is None:
        return ""
    return element.get_text(" ", strip=True)


def _attr(element: Tag | None, attribute: str) -> str:
    if element is None:
        return ""
    value = element.get(attribute)
    if value is None:
        return ""
    if isinstance(value, list):
        value = " ".join(value)
    return value.strip()


def _select_attr(root: Tag, selector: str, attribute: str) -> str:
    return _attr(root.select_one(selector), attribute)


def select_section(root: Tag, selector: str) -> Tag:
    """Return the first element matching ``selector`` or raise a structural failure."""

    element = root.select_one(selector)
    if element is None:
        error = StructuralError(selector)
        logger.debug("%s", error)
        raise error
    return element


# Record extractors


def _scrape_movie_base(fragment: Tag) -> dict[str, Any]:
    """Raw values of the fields shared by every movie card variant."""

    return {
        "title": _text(fragment, f"{MOVIE_BOTTOM_CSS} {MOVIE_TITLE_CSS}"),
        "year": _text(fragment, f"{MOVIE_BOTTOM_CSS} {MOVIE_YEAR_CSS}"),
        "link": _select_attr(fragment, MOVIE_LINK_CSS, "href"),
        "image": _select_attr(fragment, f"{MOVIE_LINK_CSS} img", "src"),
        "genres": [
            genre.get_text(strip=True)
            for genre in fragment.select(f"{MOVIE_LINK_CSS} {MOVIE_GENRE_CSS}")
        ],
    }


def scrape_movie(fragment: Tag) -> SiteMovie:
    raw = _scrape_movie_base(fragment)
    raw["rating"] = _text(fragment, f"{MOVIE_LINK_CSS} {MOVIE_RATING_CSS}")
    return validate_record(SiteMovie, raw)


def scrape_upcoming_movie(fragment: Tag) -> SiteUpcomingMovie:
    """Extract an upcoming card; its year element reads ``"<year> <quality>"``."""

    raw = _scrape_movie_base(fragment)
    year_text = raw["year"].split()
    year_element = f"{MOVIE_BOTTOM_CSS} {MOVIE_YEAR_CSS}"
    raw["progress"] = _select_attr(fragment, f"{year_element} {MOVIE_PROGRESS_CSS}", "value")
    raw["quality"] = year_text[1] if len(year_text) >= 2 else ""
    return validate_record(SiteUpcomingMovie, raw)


def scrape_director(fragment: Tag) -> SiteMovieDirector:
    raw = {
        "name": _text(fragment, DIRECTOR_NAME_CSS),
        "url_small_image": _select_attr(fragment, DIRECTOR_THUMB_CSS, "src"),
    }
    return validate_record(SiteMovieDirector, raw)


def scrape_review(fragment: Tag) -> SiteMovieReview:
    raw = {
        "author": _text(fragment, REVIEW_AUTHOR_CSS),
        "title": _text(fragment, REVIEW_TITLE_CSS),
        "content": _text(fragment, REVIEW_CONTENT_CSS),
        "rating": _text(fragment, REVIEW_RATING_CSS),
    }
    return validate_record(SiteMovieReview, raw)


def scrape_comment(fragment: Tag) -> SiteMovieComment:
    """Extract one comment; a missing likes element counts as zero likes."""

    raw = {
        "author": _text(fragment, COMMENT_AUTHOR_CSS),
        "avatar_url": _select_attr(fragment, COMMENT_AVATAR_CSS, "src"),
        "timestamp": _text(fragment, COMMENT_TIME_CSS),
        "content": _text(fragment, COMMENT_CONTENT_CSS),
        "like_count": _text(fragment, COMMENT_LIKES_CSS),
    }
    return validate_record(SiteMovieComment, raw)


def scrape_listing(
    root: Tag,
    selector: str,
    extractor: Callable[[Tag], RecordT],
    section: str,
    *,
    required: bool = True,
) -> list[RecordT]:
    """Extract every fragment matching ``selector`` with ``extractor``.

    A required selection that matches nothing raises :class:`StructuralError`
    without attempting extraction. Otherwise every fragment is extracted
    independently and all failures, tagged with their zero-based index, are
    joined into one :class:`ListingError`. The listing is all-or-nothing: no
    records are returned if any fragment failed.
    """

    fragments = root.select(selector)
    if not fragments:
        if required:
            error = StructuralError(selector)
            logger.debug("%s", error)
            raise error
        return []

    records: list[RecordT] = []
    failures: list[ItemScrapingError] = []
    for index, fragment in enumerate(fragments):
        try:
            records.append(extractor(fragment))
        except RecordValidationError as exc:
            failures.append(ItemScrapingError(section, index, exc))

    if failures:
        error = ListingError(section, failures)
        logger.debug("%s", error)
        raise error

    return records


# Page scrapers


def scrape_trending_movies(document: Tag) -> TrendingMoviesData:
    movies = scrape_listing(document, TRENDING_CSS, scrape_movie, "trending")
    return TrendingMoviesData(movies=movies)


def scrape_home_page_content(document: Tag) -> HomePageContentData:
    """Extract the popular, latest and upcoming sections of the home page.

    Sections are extracted in that order and the first failing section is
    reported on its own.
    """

    popular = scrape_listing(document, POPULAR_CSS, scrape_movie, "popular")
    latest = scrape_listing(document, LATEST_CSS, scrape_movie, "latest")
    upcoming = scrape_listing(document, UPCOMING_CSS, scrape_upcoming_movie, "upcoming")
    return HomePageContentData(popular=popular, latest=latest, upcoming=upcoming)


def scrape_movie_director(document: Tag) -> MovieDirectorData:
    section = select_section(document, DIRECTOR_CSS)
    try:
        director = scrape_director(section)
    except RecordValidationError as exc:
        logger.debug("%s", exc)
        raise
    return MovieDirectorData(director=director)


def scrape_movie_reviews(document: Tag) -> MovieReviewsData:
    reviews = scrape_listing(document, REVIEWS_CSS, scrape_review, "reviews")
    more_link = _attr(select_section(document, REVIEWS_MORE_CSS), "href")
    try:
        return validate_record(
            MovieReviewsData, {"reviews": reviews, "reviews_more_link": more_link}
        )
    except RecordValidationError as exc:
        logger.debug("%s", exc)
        raise


def scrape_comments_page_meta(document: Tag) -> CommentsPageMeta:
    """Read the numeric movie id and the comment total from a movie page."""

    info = select_section(document, MOVIE_INFO_CSS)
    comments = select_section(document, COMMENTS_SECTION_CSS)
    raw = {
        "movie_id": _attr(info, MOVIE_ID_ATTR),
        "total_count": _text(comments, COMMENT_COUNT_CSS),
    }
    try:
        return validate_record(CommentsPageMeta, raw)
    except RecordValidationError as exc:
        logger.debug("%s", exc)
        raise


def scrape_movie_comments(document: Tag) -> list[SiteMovieComment]:
    """Extract a comment-thread fragment; an empty thread yields no comments."""

    return scrape_listing(document, COMMENTS_CSS, scrape_comment, "comments", required=False)
