"""Client for the YTS JSON API and the scraped YTS website."""
from __future__ import annotations

import logging
from typing import TypeVar
from urllib.parse import quote, quote_plus, urlencode

import httpx
from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup
from pydantic import BaseModel, ValidationError

from .errors import (
    ContentRetrievalError,
    PreconditionError,
    TorrentNotFoundError,
    UnexpectedStatusError,
)
from .filters import MovieDetailsFilters, SearchMoviesFilters
from .models import (
    CommentsPageMeta,
    HomePageContentData,
    MovieAdditionalDetailsData,
    MovieCommentsData,
    MovieDirectorData,
    MovieReviewsData,
    TrendingMoviesData,
)
from .pagination import comments_offset, comments_pagination
from .schemas import (
    MovieDetailsResponse,
    MovieSuggestionsResponse,
    SearchMoviesResponse,
    TorrentInfoGetter,
)
from .scraping import (
    parse_document,
    scrape_comments_page_meta,
    scrape_home_page_content,
    scrape_movie_comments,
    scrape_movie_director,
    scrape_movie_reviews,
    scrape_trending_movies,
)
from .settings import ClientSettings

logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT", bound=BaseModel)

USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:121.0) Gecko/20100101 Firefox/121.0"


def _require_slug(slug: str) -> str:
    slug = slug.strip()
    if not slug:
        raise PreconditionError("movie slug must not be empty")
    return slug


def _require_movie_id(movie_id: int) -> int:
    if movie_id <= 0:
        raise PreconditionError("provided movie_id must be at least 1")
    return movie_id


class YTSClient:
    """Fetches YTS content over HTTP and hands it to the parsers.

    Every method validates its arguments before issuing a request. Network
    failures propagate as :class:`httpx.HTTPError`; nothing is retried.
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._settings = settings or ClientSettings()
        self._http = httpx.Client(
            timeout=self._settings.request_timeout,
            transport=transport,
            follow_redirects=True,
            headers={"User-Agent": USER_AGENT},
        )
        # Package logger level to put back on close(); None when untouched.
        self._saved_log_level: int | None = None
        if self._settings.debug:
            package_logger = logging.getLogger(__package__)
            self._saved_log_level = package_logger.level
            package_logger.setLevel(logging.DEBUG)

    @property
    def settings(self) -> ClientSettings:
        return self._settings

    def close(self) -> None:
        self._http.close()
        if self._saved_log_level is not None:
            logging.getLogger(__package__).setLevel(self._saved_log_level)
            self._saved_log_level = None

    def __enter__(self) -> YTSClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Transport helpers

    def _api_endpoint(self, path: str, query: str = "") -> str:
        target = f"{self._settings.api_base_url.rstrip('/')}/{path}"
        return f"{target}?{query}" if query else target

    def _site_page(self, path: str = "") -> str:
        base = self._settings.site_url.rstrip("/")
        return f"{base}/{path}" if path else base

    def _movie_page(self, slug: str) -> str:
        return self._site_page(f"movies/{quote(slug)}")

    def _comments_url(self, movie_id: int, offset: int) -> str:
        query = urlencode({"movieid": movie_id, "offset": offset})
        return self._site_page(f"ajax/comments.php?{query}")

    def _get(self, url: str) -> httpx.Response:
        try:
            response = self._http.get(url)
        except httpx.HTTPError as exc:
            logger.debug("GET %s failed: %s", url, exc)
            raise

        if not response.is_success:
            error = UnexpectedStatusError(response.status_code, url)
            logger.debug("%s", error)
            raise error
        return response

    def _get_json(self, url: str, model: type[ResponseT]) -> ResponseT:
        response = self._get(url)
        try:
            return model.model_validate_json(response.content)
        except ValidationError as exc:
            logger.debug("invalid JSON payload from %s: %s", url, exc)
            raise ContentRetrievalError(f"invalid JSON payload from {url}") from exc

    def _get_document(self, url: str) -> BeautifulSoup:
        response = self._get(url)
        try:
            return parse_document(response.text)
        except ParserRejectedMarkup as exc:
            logger.debug("unparsable HTML from %s: %s", url, exc)
            raise ContentRetrievalError(f"unparsable HTML from {url}") from exc

    # ------------------------------------------------------------------
    # JSON API

    def search_movies(self, filters: SearchMoviesFilters | None = None) -> SearchMoviesResponse:
        """Query ``list_movies.json``; invalid filters are rejected before the request."""

        query = (filters or SearchMoviesFilters()).query_string()
        url = self._api_endpoint("list_movies.json", query)
        return self._get_json(url, SearchMoviesResponse)

    def movie_details(
        self, movie_id: int, filters: MovieDetailsFilters | None = None
    ) -> MovieDetailsResponse:
        _require_movie_id(movie_id)
        query = (filters or MovieDetailsFilters()).query_string()
        query = "&".join(part for part in (f"movie_id={movie_id}", query) if part)
        url = self._api_endpoint("movie_details.json", query)
        return self._get_json(url, MovieDetailsResponse)

    def movie_suggestions(self, movie_id: int) -> MovieSuggestionsResponse:
        _require_movie_id(movie_id)
        url = self._api_endpoint("movie_suggestions.json", urlencode({"movie_id": movie_id}))
        return self._get_json(url, MovieSuggestionsResponse)

    # ------------------------------------------------------------------
    # Scraped pages

    def trending_movies(self) -> TrendingMoviesData:
        document = self._get_document(self._site_page("trending-movies"))
        return scrape_trending_movies(document)

    def home_page_content(self) -> HomePageContentData:
        document = self._get_document(self._site_page())
        return scrape_home_page_content(document)

    def comments_page_meta(self, slug: str) -> CommentsPageMeta:
        document = self._get_document(self._movie_page(_require_slug(slug)))
        return scrape_comments_page_meta(document)

    def resolve_movie_slug_to_id(self, slug: str) -> int:
        """Resolve a website slug such as ``"oppenheimer-2023"`` to the API movie id."""

        return self.comments_page_meta(slug).movie_id

    def movie_director(self, slug: str) -> MovieDirectorData:
        document = self._get_document(self._movie_page(_require_slug(slug)))
        return scrape_movie_director(document)

    def movie_reviews(self, slug: str) -> MovieReviewsData:
        document = self._get_document(self._movie_page(_require_slug(slug)))
        return scrape_movie_reviews(document)

    def movie_comments(self, slug: str, page: int = 1) -> MovieCommentsData:
        """Return the 1-based ``page`` of a movie's comments.

        The movie page is fetched first to learn the movie id and the comment
        total, then the comment thread is fetched at the page's offset.
        """

        comments_offset(page)
        meta = self.comments_page_meta(slug)
        return self._comments_page(meta, page)

    def _comments_page(self, meta: CommentsPageMeta, page: int) -> MovieCommentsData:
        offset, has_more = comments_pagination(page, meta.total_count)
        fragment = self._get_document(self._comments_url(meta.movie_id, offset))
        comments = scrape_movie_comments(fragment)
        return MovieCommentsData(
            comments=comments,
            page=page,
            total_count=meta.total_count,
            has_more=has_more,
        )

    def movie_additional_details(self, slug: str) -> MovieAdditionalDetailsData:
        """Scrape director, reviews and the first comments page of one movie.

        All sections come from a single fetch of the movie page and are
        extracted in order; the first failing section is raised as is.
        """

        document = self._get_document(self._movie_page(_require_slug(slug)))
        director = scrape_movie_director(document)
        reviews = scrape_movie_reviews(document)
        meta = scrape_comments_page_meta(document)
        comments = self._comments_page(meta, 1)
        return MovieAdditionalDetailsData(
            director=director.director,
            reviews=reviews.reviews,
            reviews_more_link=reviews.reviews_more_link,
            comments=comments,
        )

    # ------------------------------------------------------------------
    # Magnet links

    def magnet_link(self, source: TorrentInfoGetter, quality: str) -> str:
        """Build a magnet URI for the torrent of ``source`` matching ``quality``."""

        info = source.get_torrent_info()
        torrent = next((t for t in info.torrents if t.quality == quality), None)
        if torrent is None:
            raise TorrentNotFoundError(f"no torrent found having quality {quality}")

        domain = self._settings.site_domain.upper()
        name = f"{info.movie_title}+[{quality}]+[{domain}]"
        trackers = urlencode([("tr", tracker) for tracker in self._settings.torrent_trackers])
        magnet = f"magnet:?xt=urn:btih:{torrent.hash}&dn={quote_plus(name)}"
        return f"{magnet}&{trackers}" if trackers else magnet
