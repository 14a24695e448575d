"""Configuration for fetching remote feed files."""

from __future__ import annotations

from dataclasses import dataclass, field

import httpx

DOWNLOAD_TIMEOUT_SECONDS = 300.0


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    total: int = 4
    backoff_factor: float = 0.5
    max_backoff_wait: float = 60.0
    respect_retry_after_header: bool = True
    status_forcelist: frozenset[int] = field(
        default_factory=lambda: frozenset({429, 500, 502, 503, 504})
    )
    retry_on_exceptions: tuple[type[httpx.HTTPError], ...] = (
        httpx.TimeoutException,
        httpx.NetworkError,
        httpx.RemoteProtocolError,
    )


@dataclass(slots=True, frozen=True)
class DownloadConfig:
    timeout_seconds: float = DOWNLOAD_TIMEOUT_SECONDS
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    compress: bool = True
    prepend_date_stamp: bool = True


def get_download_config() -> DownloadConfig:
    return DownloadConfig()
