"""Runtime configuration for the YTS client."""
from __future__ import annotations

from urllib.parse import urlparse

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_BASE_URL = "https://yts.mx/api/v2"
DEFAULT_SITE_URL = "https://yts.mx"

MIN_REQUEST_TIMEOUT = 5.0
MAX_REQUEST_TIMEOUT = 300.0


def default_torrent_trackers() -> list[str]:
    return [
        "udp://open.demonii.com:1337/announce",
        "udp://tracker.openbittorrent.com:80",
        "udp://tracker.coppersurfer.tk:6969",
        "udp://glotorrents.pw:6969/announce",
        "udp://tracker.opentrackr.org:1337/announce",
        "udp://torrent.gresille.org:80/announce",
        "udp://p4p.arenabg.com:1337",
        "udp://tracker.leechers-paradise.org:6969",
    ]


class ClientSettings(BaseSettings):
    """Environment-aware settings for :class:`~backend.yts.client.YTSClient`."""

    api_base_url: str = Field(
        DEFAULT_API_BASE_URL, description="Base URL of the YTS JSON API."
    )
    site_url: str = Field(
        DEFAULT_SITE_URL, description="Base URL of the YTS website that is scraped."
    )
    request_timeout: float = Field(
        default=60.0,
        ge=MIN_REQUEST_TIMEOUT,
        le=MAX_REQUEST_TIMEOUT,
        description="Per-request timeout in seconds, between 5 and 300 inclusive.",
    )
    torrent_trackers: list[str] = Field(
        default_factory=default_torrent_trackers,
        description="Trackers appended to generated magnet links.",
    )
    debug: bool = Field(
        default=False, description="Emit debug logging for failed fetches and extractions."
    )

    model_config = SettingsConfigDict(
        env_prefix="YTS_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    @property
    def site_domain(self) -> str:
        """Host name of the scraped site, used in magnet display names."""

        return urlparse(self.site_url).netloc
