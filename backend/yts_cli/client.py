"""YTS client construction for the command line interface."""
from __future__ import annotations

import httpx

from backend.yts import ClientSettings, YTSClient


def create_client(
    *, debug: bool = False, timeout: float | None = None, transport: httpx.BaseTransport | None = None
) -> YTSClient:
    """Instantiate a YTS client from environment settings with CLI overrides."""

    overrides: dict[str, object] = {}
    if debug:
        overrides["debug"] = True
    if timeout is not None:
        overrides["request_timeout"] = timeout
    return YTSClient(ClientSettings(**overrides), transport=transport)
