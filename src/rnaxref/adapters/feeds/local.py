"""Feed source reading plain or gzip-compressed local files."""

from __future__ import annotations

import gzip
import logging
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

log = logging.getLogger(__name__)


class UnknownFeedError(LookupError):
    """Raised when a feed name has no configured file."""


def read_lines(path: Path) -> Iterator[str]:
    """Yield the lines of ``path`` with their terminators, decompressing ``.gz`` files."""

    if path.suffix == ".gz":
        with gzip.open(path, "rt", encoding="utf-8", newline="") as handle:
            yield from handle
        return
    with path.open(encoding="utf-8", newline="") as handle:
        yield from handle


class LocalFeedSource:
    """Map feed names to local files; every ``open_lines`` call re-opens the file."""

    def __init__(self, paths: Mapping[str, Path | str]) -> None:
        self._paths = {name: Path(path) for name, path in paths.items()}

    def open_lines(self, feed_name: str) -> Iterator[str]:
        path = self._paths.get(feed_name)
        if path is None:
            raise UnknownFeedError(f"No file configured for feed {feed_name!r}")
        log.debug("Reading feed %s from %s", feed_name, path)
        return read_lines(path)


if TYPE_CHECKING:
    from rnaxref.domain.ports import FeedSource

    _feed_source_check: FeedSource = LocalFeedSource({})
