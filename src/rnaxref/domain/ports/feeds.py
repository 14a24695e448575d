"""Ports for reading external mapping feeds."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterator


@runtime_checkable
class FeedSource(Protocol):
    """Produce the raw lines of a named feed.

    Every call re-opens the feed, so species runs can read the same file
    independently and concurrently.
    """

    def open_lines(self, feed_name: str) -> Iterator[str]: ...


__all__ = ["FeedSource"]
