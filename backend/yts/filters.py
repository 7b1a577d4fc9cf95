"""Query filters accepted by the YTS JSON API endpoints."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from functools import lru_cache
from typing import Annotated, Any
from urllib.parse import urlencode

from pydantic import AfterValidator, Field, TypeAdapter, ValidationError

from .errors import FilterValidationError
from .validation import member_of, translate_errors

SEARCH_QUALITIES = ("all", "480p", "720p", "1080p", "1080p.x265", "2160p", "3D")
SEARCH_GENRES = (
    "all",
    "action",
    "adventure",
    "animation",
    "biography",
    "comedy",
    "crime",
    "documentary",
    "drama",
    "family",
    "fantasy",
    "film-noir",
    "game-show",
    "history",
    "horror",
    "music",
    "musical",
    "mystery",
    "news",
    "reality-tv",
    "romance",
    "sci-fi",
    "sport",
    "talk-show",
    "thriller",
    "war",
    "western",
)
SORT_KEYS = (
    "title",
    "year",
    "rating",
    "peers",
    "seeds",
    "download_count",
    "like_count",
    "date_added",
)
ORDER_KEYS = ("asc", "desc")

DEFAULT_PAGE_LIMIT = 20

Limit = Annotated[int, Field(ge=1, le=50)]
PageNumber = Annotated[int, Field(ge=1)]
MinimumRating = Annotated[int, Field(ge=0, le=9)]
SearchQuality = Annotated[str, AfterValidator(member_of(SEARCH_QUALITIES))]
SearchGenre = Annotated[str, AfterValidator(member_of(SEARCH_GENRES))]
SortBy = Annotated[str, AfterValidator(member_of(SORT_KEYS))]
OrderBy = Annotated[str, AfterValidator(member_of(ORDER_KEYS))]


@lru_cache(maxsize=None)
def _adapter(filters_type: type) -> TypeAdapter[Any]:
    return TypeAdapter(filters_type)


class _Filters:
    """Shared validation and query-string rendering for filter dataclasses."""

    def validate(self) -> None:
        """Raise :class:`FilterValidationError` naming every invalid filter."""

        name = type(self).__name__
        data = asdict(self)  # type: ignore[call-overload]
        try:
            _adapter(type(self)).validate_python(data)
        except ValidationError as exc:
            raise FilterValidationError(name, translate_errors(name, exc, data)) from exc

    def query_string(self) -> str:
        """Validate the filters and encode the non-empty ones, sorted by key."""

        self.validate()
        params: list[tuple[str, str]] = []
        for key, value in sorted(asdict(self).items()):  # type: ignore[call-overload]
            if isinstance(value, bool):
                if value:
                    params.append((key, "true"))
            elif isinstance(value, int):
                if value != 0:
                    params.append((key, str(value)))
            elif value:
                params.append((key, str(value)))
        return urlencode(params)


@dataclass
class SearchMoviesFilters(_Filters):
    """Filters for ``list_movies.json``."""

    limit: Limit = DEFAULT_PAGE_LIMIT
    page: PageNumber = 1
    quality: SearchQuality = "all"
    minimum_rating: MinimumRating = 0
    query_term: str = ""
    genre: SearchGenre = "all"
    sort_by: SortBy = "date_added"
    order_by: OrderBy = "desc"
    with_rt_ratings: bool = False


@dataclass
class MovieDetailsFilters(_Filters):
    """Filters for ``movie_details.json``."""

    with_images: bool = True
    with_cast: bool = True


def default_search_movies_filters(query_term: str = "") -> SearchMoviesFilters:
    return SearchMoviesFilters(query_term=query_term)


def default_movie_details_filters() -> MovieDetailsFilters:
    return MovieDetailsFilters()
