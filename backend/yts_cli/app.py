"""Command line interface for the YTS catalog client."""
from __future__ import annotations

import json
import logging
from typing import Callable, Optional, TypeVar

import httpx
import typer
from pydantic import BaseModel, ValidationError

from backend.yts import YTSClient, YTSError
from backend.yts.filters import SearchMoviesFilters, MovieDetailsFilters

from .client import create_client

T = TypeVar("T")

app = typer.Typer(help="Query the YTS API and scrape YTS pages.")


def _debug_option() -> typer.Option:
    return typer.Option(
        False,
        "--debug/--no-debug",
        help="Log failed fetches and extractions.",
        envvar="YTS_DEBUG",
    )


def _timeout_option() -> typer.Option:
    return typer.Option(
        None,
        "--timeout",
        help="Request timeout in seconds (5-300).",
    )


def _run(debug: bool, timeout: Optional[float], action: Callable[[YTSClient], T]) -> T:
    """Execute ``action`` with a fresh client, mapping failures to exit code 1."""

    logging.basicConfig(level=logging.DEBUG if debug else logging.INFO)
    try:
        with create_client(debug=debug, timeout=timeout) as client:
            return action(client)
    except (YTSError, httpx.HTTPError, ValidationError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc


def _echo(payload: BaseModel | str) -> None:
    if isinstance(payload, str):
        typer.echo(payload)
        return
    data = payload.model_dump(mode="json", by_alias=True)
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


@app.command()
def search(
    query_term: str = typer.Argument("", help="Free-text query; empty lists every movie."),
    limit: int = typer.Option(20, help="Results per page (1-50)."),
    page: int = typer.Option(1, help="Result page, starting at 1."),
    quality: str = typer.Option("all", help="Torrent quality filter."),
    minimum_rating: int = typer.Option(0, help="Minimum IMDb rating (0-9)."),
    genre: str = typer.Option("all", help="Genre filter."),
    sort_by: str = typer.Option("date_added", help="Sort key."),
    order_by: str = typer.Option("desc", help="Sort order, asc or desc."),
    with_rt_ratings: bool = typer.Option(
        False, "--with-rt-ratings/--no-with-rt-ratings", help="Include Rotten Tomatoes ratings."
    ),
    debug: bool = _debug_option(),
    timeout: Optional[float] = _timeout_option(),
) -> None:
    """Search movies through list_movies.json."""

    filters = SearchMoviesFilters(
        limit=limit,
        page=page,
        quality=quality,
        minimum_rating=minimum_rating,
        query_term=query_term,
        genre=genre,
        sort_by=sort_by,
        order_by=order_by,
        with_rt_ratings=with_rt_ratings,
    )
    _echo(_run(debug, timeout, lambda client: client.search_movies(filters)))


@app.command()
def details(
    movie_id: int = typer.Argument(..., help="Numeric YTS movie id."),
    with_images: bool = typer.Option(True, "--with-images/--no-with-images"),
    with_cast: bool = typer.Option(True, "--with-cast/--no-with-cast"),
    debug: bool = _debug_option(),
    timeout: Optional[float] = _timeout_option(),
) -> None:
    """Show movie_details.json for one movie."""

    filters = MovieDetailsFilters(with_images=with_images, with_cast=with_cast)
    _echo(_run(debug, timeout, lambda client: client.movie_details(movie_id, filters)))


@app.command()
def suggestions(
    movie_id: int = typer.Argument(..., help="Numeric YTS movie id."),
    debug: bool = _debug_option(),
    timeout: Optional[float] = _timeout_option(),
) -> None:
    """List movies suggested for one movie."""

    _echo(_run(debug, timeout, lambda client: client.movie_suggestions(movie_id)))


@app.command()
def trending(
    debug: bool = _debug_option(),
    timeout: Optional[float] = _timeout_option(),
) -> None:
    """Scrape the trending movies page."""

    _echo(_run(debug, timeout, lambda client: client.trending_movies()))


@app.command()
def home(
    debug: bool = _debug_option(),
    timeout: Optional[float] = _timeout_option(),
) -> None:
    """Scrape the popular, latest and upcoming sections of the home page."""

    _echo(_run(debug, timeout, lambda client: client.home_page_content()))


@app.command()
def resolve(
    slug: str = typer.Argument(..., help="Movie slug, e.g. oppenheimer-2023."),
    debug: bool = _debug_option(),
    timeout: Optional[float] = _timeout_option(),
) -> None:
    """Print the numeric movie id behind a website slug."""

    _echo(str(_run(debug, timeout, lambda client: client.resolve_movie_slug_to_id(slug))))


@app.command()
def director(
    slug: str = typer.Argument(..., help="Movie slug, e.g. oppenheimer-2023."),
    debug: bool = _debug_option(),
    timeout: Optional[float] = _timeout_option(),
) -> None:
    """Scrape the director of a movie."""

    _echo(_run(debug, timeout, lambda client: client.movie_director(slug)))


@app.command()
def reviews(
    slug: str = typer.Argument(..., help="Movie slug, e.g. oppenheimer-2023."),
    debug: bool = _debug_option(),
    timeout: Optional[float] = _timeout_option(),
) -> None:
    """Scrape the reviews shown on a movie page."""

    _echo(_run(debug, timeout, lambda client: client.movie_reviews(slug)))


@app.command()
def comments(
    slug: str = typer.Argument(..., help="Movie slug, e.g. oppenheimer-2023."),
    page: int = typer.Option(1, help="Comment page, starting at 1."),
    debug: bool = _debug_option(),
    timeout: Optional[float] = _timeout_option(),
) -> None:
    """Scrape one page of a movie's comments."""

    _echo(_run(debug, timeout, lambda client: client.movie_comments(slug, page)))


@app.command("additional-details")
def additional_details(
    slug: str = typer.Argument(..., help="Movie slug, e.g. oppenheimer-2023."),
    debug: bool = _debug_option(),
    timeout: Optional[float] = _timeout_option(),
) -> None:
    """Scrape director, reviews and the first comments page of a movie."""

    _echo(_run(debug, timeout, lambda client: client.movie_additional_details(slug)))


@app.command()
def magnet(
    movie_id: int = typer.Argument(..., help="Numeric YTS movie id."),
    quality: str = typer.Option("1080p", help="Torrent quality to link."),
    debug: bool = _debug_option(),
    timeout: Optional[float] = _timeout_option(),
) -> None:
    """Print the magnet link of a movie's torrent."""

    def _magnet(client: YTSClient) -> str:
        movie = client.movie_details(movie_id).data.movie
        return client.magnet_link(movie, quality)

    _echo(_run(debug, timeout, _magnet))
