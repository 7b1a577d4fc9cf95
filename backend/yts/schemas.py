"""Pydantic models for payloads returned by the YTS JSON API."""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


class APIModel(BaseModel):
    """Base for API payload models; unknown keys are ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Meta(APIModel):
    server_time: int = 0
    server_timezone: str = ""
    api_version: int = 0
    execution_time: str = ""


class Cast(APIModel):
    name: str = ""
    character_name: str = ""
    imdb_code: str = ""
    url_small_image: str = ""


class Torrent(APIModel):
    url: str = ""
    hash: str = ""
    quality: str = ""
    type: str = ""
    is_repack: str = ""
    video_codec: str = ""
    bit_depth: str = ""
    audio_channels: str = ""
    seeds: int = 0
    peers: int = 0
    size: str = ""
    size_bytes: int = 0
    date_uploaded: str = ""
    date_uploaded_unix: int = 0


class TorrentInfo(BaseModel):
    """Title and torrents of a movie, the input of magnet-link synthesis."""

    movie_title: str
    torrents: list[Torrent] = Field(default_factory=list)


@runtime_checkable
class TorrentInfoGetter(Protocol):
    """Anything that can supply the torrents available for one movie."""

    def get_torrent_info(self) -> TorrentInfo:
        ...


class MoviePartial(APIModel):
    """Movie information common to the list, details and suggestions endpoints."""

    id: int = 0
    url: str = ""
    imdb_code: str = ""
    title: str = ""
    title_english: str = ""
    title_long: str = ""
    slug: str = ""
    year: int = 0
    rating: float = 0.0
    runtime: int = 0
    genres: list[str] = Field(default_factory=list)
    description_full: str = ""
    yt_trailer_code: str = ""
    language: str = ""
    mpa_rating: str = ""
    background_image: str = ""
    background_image_original: str = ""
    small_cover_image: str = ""
    medium_cover_image: str = ""
    large_cover_image: str = ""
    torrents: list[Torrent] = Field(default_factory=list)
    date_uploaded: str = ""
    date_uploaded_unix: int = 0

    def get_torrent_info(self) -> TorrentInfo:
        return TorrentInfo(movie_title=self.title_long, torrents=self.torrents)


class Movie(MoviePartial):
    """Movie entry of ``list_movies.json`` and ``movie_suggestions.json``."""

    summary: str = ""
    synopsis: str = ""
    state: str = ""


class MovieDetails(MoviePartial):
    """Movie entry of ``movie_details.json``."""

    like_count: int = 0
    description_intro: str = ""
    medium_screenshot_image1: str = ""
    medium_screenshot_image2: str = ""
    medium_screenshot_image3: str = ""
    large_screenshot_image1: str = ""
    large_screenshot_image2: str = ""
    large_screenshot_image3: str = ""
    cast: list[Cast] = Field(default_factory=list)


class BaseResponse(APIModel):
    status: str = ""
    status_message: str = ""
    meta: Meta = Field(default_factory=Meta, alias="@meta")


class SearchMoviesData(APIModel):
    movie_count: int = 0
    limit: int = 0
    page_number: int = 0
    movies: list[Movie] = Field(default_factory=list)


class MovieDetailsData(APIModel):
    movie: MovieDetails = Field(default_factory=MovieDetails)


class MovieSuggestionsData(APIModel):
    movie_count: int = 0
    movies: list[Movie] = Field(default_factory=list)


class SearchMoviesResponse(BaseResponse):
    data: SearchMoviesData = Field(default_factory=SearchMoviesData)


class MovieDetailsResponse(BaseResponse):
    data: MovieDetailsData = Field(default_factory=MovieDetailsData)


class MovieSuggestionsResponse(BaseResponse):
    data: MovieSuggestionsData = Field(default_factory=MovieSuggestionsData)
