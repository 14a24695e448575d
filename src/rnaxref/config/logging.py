"""Logging setup for the CLI and the audit trail."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from pathlib import Path

AUDIT_LOGGERS: Final[dict[str, str]] = {
    "rnaxref.audit.multimatch": "multimatch.log",
    "rnaxref.audit.inserted": "inserted.log",
    "rnaxref.audit.deleted": "deleted.log",
}


def configure_logging(
    *,
    level: int = logging.INFO,
    force: bool = False,
    log_dir: Path | None = None,
) -> None:
    """Initialise the root logger once with sensible defaults.

    Parameters mirror ``logging.basicConfig`` with a simplified contract: we default
    to INFO level and a terse format suitable for CLI output. Pass ``force=True`` to
    reconfigure during tests or specialised entry points.

    With ``log_dir`` the audit loggers (multimatch, inserted and deleted records)
    additionally write one file each into that directory and stop propagating to
    the console.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    if log_dir is None:
        return

    log_dir.mkdir(parents=True, exist_ok=True)
    for logger_name, filename in AUDIT_LOGGERS.items():
        audit_log = logging.getLogger(logger_name)
        for handler in list(audit_log.handlers):
            audit_log.removeHandler(handler)
            handler.close()
        handler = logging.FileHandler(log_dir / filename, encoding="utf-8")
        handler.setFormatter(logging.Formatter("%(asctime)s %(message)s"))
        audit_log.addHandler(handler)
        audit_log.setLevel(logging.INFO)
        audit_log.propagate = False
