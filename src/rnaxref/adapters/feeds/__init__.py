"""Feed adapters: local files and remote downloads."""

from __future__ import annotations

from .download import build_download_client, download_feed, is_remote, local_feed_path
from .local import LocalFeedSource, UnknownFeedError, read_lines

__all__ = [
    "LocalFeedSource",
    "UnknownFeedError",
    "build_download_client",
    "download_feed",
    "is_remote",
    "local_feed_path",
    "read_lines",
]
