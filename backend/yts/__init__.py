"""
YTS catalog client.

This package wraps the YTS JSON API and scrapes the server-rendered YTS pages
that have no API endpoint (trending and home page listings, directors,
reviews and comment threads) into validated, immutable records.
"""

from .client import YTSClient
from .errors import (
    CompositeError,
    ContentRetrievalError,
    FieldValidationError,
    FilterValidationError,
    ItemScrapingError,
    ListingError,
    PreconditionError,
    RecordValidationError,
    StructuralError,
    TorrentNotFoundError,
    UnexpectedStatusError,
    YTSError,
)
from .filters import (
    MovieDetailsFilters,
    SearchMoviesFilters,
    default_movie_details_filters,
    default_search_movies_filters,
)
from .pagination import COMMENTS_PAGE_SIZE, comments_pagination
from .settings import ClientSettings

__all__ = [
    "YTSClient",
    "ClientSettings",
    "SearchMoviesFilters",
    "MovieDetailsFilters",
    "default_search_movies_filters",
    "default_movie_details_filters",
    "COMMENTS_PAGE_SIZE",
    "comments_pagination",
    "YTSError",
    "PreconditionError",
    "StructuralError",
    "FieldValidationError",
    "CompositeError",
    "RecordValidationError",
    "FilterValidationError",
    "ItemScrapingError",
    "ListingError",
    "UnexpectedStatusError",
    "ContentRetrievalError",
    "TorrentNotFoundError",
]
