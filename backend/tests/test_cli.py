"""Tests for the Typer-based YTS CLI."""
from __future__ import annotations

import importlib
import json
import sys
from pathlib import Path
from typing import Any

import httpx
import pytest
from typer.testing import CliRunner

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from backend.yts import ClientSettings, YTSClient  # noqa: E402

from yts_pages import comment_item, movie_card, movie_page, trending_page  # noqa: E402

cli_app_module = importlib.import_module("backend.yts_cli.app")
cli_app = cli_app_module.app


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def cli_site(site, settings: ClientSettings, monkeypatch: pytest.MonkeyPatch):
    """Route the CLI's client factory to the ``site`` stub."""

    calls: list[dict[str, Any]] = []

    def _factory(*, debug: bool = False, timeout: float | None = None, transport: Any = None):
        calls.append({"debug": debug, "timeout": timeout})
        return YTSClient(settings, transport=httpx.MockTransport(site.handler))

    monkeypatch.setattr(cli_app_module, "create_client", _factory)
    site.factory_calls = calls
    return site


def test_cli_trending_prints_movies_as_json(runner: CliRunner, cli_site) -> None:
    cli_site.html("/trending-movies", trending_page(movie_card(), movie_card(title="Juno")))

    result = runner.invoke(cli_app, ["trending"])

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert [movie["title"] for movie in payload["movies"]] == ["Superbad", "Juno"]
    assert payload["movies"][0]["rating"] == "7.6 / 10"


def test_cli_comments_rejects_page_zero(runner: CliRunner, cli_site) -> None:
    result = runner.invoke(cli_app, ["comments", "oppenheimer-2023", "--page", "0"])

    assert result.exit_code == 1
    assert "page must be at least 1" in result.output
    assert cli_site.requests == []


def test_cli_comments_prints_requested_page(runner: CliRunner, cli_site) -> None:
    cli_site.html("/movies/oppenheimer-2023", movie_page(comment_count="61"))
    cli_site.html("/ajax/comments.php", comment_item())

    result = runner.invoke(cli_app, ["comments", "oppenheimer-2023", "--page", "2"])

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["page"] == 2
    assert payload["has_more"] is True
    assert payload["comments"][0]["author"] == "movielover"


def test_cli_resolve_prints_movie_id(runner: CliRunner, cli_site) -> None:
    cli_site.html("/movies/oppenheimer-2023", movie_page(movie_id="3175"))

    result = runner.invoke(cli_app, ["resolve", "oppenheimer-2023"])

    assert result.exit_code == 0
    assert result.output.strip() == "3175"


def test_cli_reports_validation_failures(runner: CliRunner, cli_site) -> None:
    cli_site.html("/trending-movies", trending_page(movie_card(year="soon")))

    result = runner.invoke(cli_app, ["trending"])

    assert result.exit_code == 1
    assert 'trending, i=0, failed validation for "SiteMovie.year"' in result.output


def test_cli_reports_unexpected_status(runner: CliRunner, cli_site) -> None:
    result = runner.invoke(cli_app, ["director", "missing-movie"])

    assert result.exit_code == 1
    assert "status code: 404" in result.output


def test_cli_magnet_uses_movie_details(runner: CliRunner, cli_site) -> None:
    cli_site.json(
        "/api/v2/movie_details.json",
        {
            "status": "ok",
            "status_message": "Query was successful",
            "data": {
                "movie": {
                    "id": 10,
                    "title_long": "Superbad (2007)",
                    "torrents": [{"quality": "1080p", "hash": "FEED"}],
                }
            },
        },
    )

    result = runner.invoke(cli_app, ["magnet", "10", "--quality", "1080p", "--timeout", "30"])

    assert result.exit_code == 0
    assert result.output.strip().startswith("magnet:?xt=urn:btih:FEED&dn=Superbad")
    assert cli_site.factory_calls == [{"debug": False, "timeout": 30.0}]


def test_cli_search_rejects_invalid_filters(runner: CliRunner, cli_site) -> None:
    result = runner.invoke(cli_app, ["search", "matrix", "--limit", "99"])

    assert result.exit_code == 1
    assert '"SearchMoviesFilters.limit"' in result.output
    assert cli_site.requests == []
