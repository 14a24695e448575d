"""Fetch remote feed files into the local data directory.

Downloads are stored under a date-stamped name, so a second run on the same
day reuses the file instead of fetching it again. Locations that are not
HTTP(S) URLs are treated as local paths and returned unchanged.
"""

from __future__ import annotations

import gzip
import logging
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO

import httpx
from httpx_retries import Retry, RetryTransport

from rnaxref.config import DownloadConfig, get_download_config

if TYPE_CHECKING:
    from rnaxref.config import RetryPolicy

log = logging.getLogger(__name__)


def is_remote(location: str) -> bool:
    return location.startswith(("http://", "https://"))


def build_retry(policy: RetryPolicy) -> Retry:
    return Retry(
        total=policy.total,
        backoff_factor=policy.backoff_factor,
        max_backoff_wait=policy.max_backoff_wait,
        respect_retry_after_header=policy.respect_retry_after_header,
        allowed_methods=("GET", "HEAD"),
        status_forcelist=tuple(policy.status_forcelist),
        retry_on_exceptions=policy.retry_on_exceptions,
    )


def build_download_client(config: DownloadConfig | None = None) -> httpx.Client:
    effective = config or get_download_config()
    return httpx.Client(
        timeout=effective.timeout_seconds,
        transport=RetryTransport(retry=build_retry(effective.retry)),
        follow_redirects=True,
    )


def local_feed_path(
    location: str,
    target_dir: Path,
    *,
    name: str,
    config: DownloadConfig | None = None,
    today: date | None = None,
) -> Path:
    """Return the file a remote ``location`` is (or will be) stored in."""

    effective = config or get_download_config()
    filename = name
    if effective.prepend_date_stamp:
        filename = f"{(today or date.today()):%Y%m%d}_{filename}"
    if effective.compress or location.endswith(".gz"):
        filename = f"{filename}.gz"
    return target_dir / filename


def download_feed(
    location: str,
    target_dir: Path,
    *,
    name: str,
    config: DownloadConfig | None = None,
    client: httpx.Client | None = None,
    today: date | None = None,
) -> Path:
    """Make ``location`` available as a local file and return its path."""

    if not is_remote(location):
        return Path(location).expanduser()

    effective = config or get_download_config()
    target = local_feed_path(location, target_dir, name=name, config=effective, today=today)
    if target.exists():
        log.info("Reusing downloaded feed %s", target)
        return target

    target_dir.mkdir(parents=True, exist_ok=True)
    compress = effective.compress and not location.endswith(".gz")
    partial = target.with_name(f"{target.name}.part")
    http = client or build_download_client(effective)
    log.info("Downloading %s to %s", location, target)
    try:
        with http.stream("GET", location) as response:
            response.raise_for_status()
            with _open_output(partial, compress=compress) as output:
                for chunk in response.iter_bytes():
                    output.write(chunk)
        partial.replace(target)
    finally:
        if client is None:
            http.close()
        partial.unlink(missing_ok=True)
    return target


def _open_output(path: Path, *, compress: bool) -> BinaryIO:
    if compress:
        return gzip.open(path, "wb")  # type: ignore[return-value]
    return path.open("wb")


__all__ = [
    "build_download_client",
    "download_feed",
    "is_remote",
    "local_feed_path",
]
