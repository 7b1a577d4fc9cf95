"""Shared fixtures and HTTP stubs for the YTS test-suite."""
from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

import httpx
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from backend.yts import ClientSettings, YTSClient  # noqa: E402

from yts_pages import SITE  # noqa: E402


@dataclass
class StubSite:
    """Routes request paths to canned responses and records every request."""

    routes: dict[str, Callable[[httpx.Request], httpx.Response]] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)

    def html(self, path: str, body: str, status_code: int = 200) -> None:
        self.routes[path] = lambda _request: httpx.Response(status_code, text=body)

    def json(self, path: str, payload: object, status_code: int = 200) -> None:
        self.routes[path] = lambda _request: httpx.Response(status_code, json=payload)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, text="not found")
        return route(request)

    @property
    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]


@pytest.fixture()
def site() -> StubSite:
    return StubSite()


@pytest.fixture()
def settings() -> ClientSettings:
    return ClientSettings(
        api_base_url=f"{SITE}/api/v2",
        site_url=SITE,
        torrent_trackers=["udp://tracker.example:80"],
        debug=False,
    )


@pytest.fixture()
def client(site: StubSite, settings: ClientSettings) -> YTSClient:
    """A client whose HTTP traffic is served by the ``site`` stub."""

    yts_client = YTSClient(settings, transport=httpx.MockTransport(site.handler))
    yield yts_client
    yts_client.close()
