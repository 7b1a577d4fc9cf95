"""Records extracted from server-rendered YTS pages."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .validation import (
    GenreField,
    LeadingInt,
    LikeCount,
    OptionalRating,
    Progress,
    QualityField,
    Rating,
    RequiredStr,
    Url,
    Year,
)


class ScrapedRecord(BaseModel):
    """Immutable value produced by extracting one HTML fragment."""

    model_config = ConfigDict(frozen=True)


class SiteMovieBase(ScrapedRecord):
    """Fields shared by every "movie card" shown on the YTS website."""

    title: RequiredStr
    year: Year
    link: Url
    image: RequiredStr
    genres: list[GenreField] = Field(default_factory=list)


class SiteMovie(SiteMovieBase):
    """A movie card from the trending page or the popular/latest home sections."""

    rating: OptionalRating = None


class SiteUpcomingMovie(SiteMovieBase):
    """A movie card from the upcoming section of the home page."""

    progress: Progress
    quality: QualityField


class SiteMovieDirector(ScrapedRecord):
    name: RequiredStr
    url_small_image: Url


class SiteMovieReview(ScrapedRecord):
    author: RequiredStr
    title: RequiredStr
    content: RequiredStr
    rating: Rating


class SiteMovieComment(ScrapedRecord):
    author: RequiredStr
    avatar_url: Url
    timestamp: RequiredStr
    content: RequiredStr
    like_count: LikeCount = 0


class CommentsPageMeta(ScrapedRecord):
    """Movie identifier and comment total read from a movie's main page."""

    movie_id: LeadingInt = Field(gt=0)
    total_count: LikeCount


class TrendingMoviesData(ScrapedRecord):
    movies: list[SiteMovie]


class HomePageContentData(ScrapedRecord):
    popular: list[SiteMovie]
    latest: list[SiteMovie]
    upcoming: list[SiteUpcomingMovie]


class MovieDirectorData(ScrapedRecord):
    director: SiteMovieDirector


class MovieReviewsData(ScrapedRecord):
    reviews: list[SiteMovieReview]
    reviews_more_link: Url


class MovieCommentsData(ScrapedRecord):
    """One page of a movie's comment thread."""

    comments: list[SiteMovieComment]
    page: int
    total_count: int
    has_more: bool


class MovieAdditionalDetailsData(ScrapedRecord):
    """Director, reviews and first comments page scraped for a single movie."""

    director: SiteMovieDirector
    reviews: list[SiteMovieReview]
    reviews_more_link: Url
    comments: MovieCommentsData
