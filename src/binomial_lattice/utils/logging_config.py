"""Logging setup for entrypoints.

Library modules only create `logger = logging.getLogger(__name__)`; the CLI
calls `setup_logging(...)` once. The console handler injects
`record.shortname` (last dotted component of the logger name), so console
formats may use `%(shortname)s`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

_LEVELS: dict[str, int] = {
    "CRITICAL": logging.CRITICAL,
    "FATAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "NOTSET": logging.NOTSET,
}


class _AddShortNameFilter(logging.Filter):
    """Expose the last logger-name component as `record.shortname`."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.shortname = record.name.rsplit(".", 1)[-1]
        return True


class _ColorFormatter(logging.Formatter):
    """Console formatter that colors the level name only."""

    _RESET = "\033[0m"
    _LEVEL_COLOR: dict[int, str] = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;31m",
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self._LEVEL_COLOR.get(record.levelno)
        if not color:
            return super().format(record)

        original = record.levelname
        record.levelname = f"{color}{original}{self._RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def coerce_level(level: int | str) -> int:
    """Coerce a logging level given as int, digit string, or name."""
    if isinstance(level, int):
        return level

    name = str(level).strip().upper()
    if not name:
        raise ValueError("Empty logging level")
    if name.isdigit():
        return int(name)
    try:
        return _LEVELS[name]
    except KeyError as e:
        raise ValueError(f"Unknown logging level: {level!r}") from e


def _console_handler(fmt: str, datefmt: str, colored: bool) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.addFilter(_AddShortNameFilter())
    formatter_cls = _ColorFormatter if colored else logging.Formatter
    handler.setFormatter(formatter_cls(fmt=fmt, datefmt=datefmt))
    return handler


def _file_handler(path: str | Path, fmt: str, datefmt: str) -> logging.Handler:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(p, encoding="utf-8")
    handler.setFormatter(logging.Formatter(fmt=fmt, datefmt=datefmt))
    return handler


def setup_logging(
    level: int | str = "INFO",
    *,
    fmt_console: str = "%(asctime)s %(levelname)s %(name)s - %(message)s",
    fmt_file: str = "%(asctime)s %(levelname)s %(name)s - %(message)s",
    datefmt: str = "%Y-%m-%d %H:%M:%S",
    log_file: str | Path | None = None,
    module_levels: Mapping[str, int | str] | None = None,
    colored: bool = False,
) -> None:
    """Configure root logging once per process.

    Parameters
    - level: Root log level (int or name).
    - fmt_console: Console format; may use `%(shortname)s`.
    - fmt_file: File format, used only with `log_file`.
    - datefmt: Timestamp format.
    - log_file: Optional path to also write logs to; parents are created.
    - module_levels: Optional per-logger level overrides, e.g.
      `{"binomial_lattice.options.pricing": "DEBUG"}`.
    - colored: Colorize console level names (ANSI).

    Uses `force=True` so repeated calls replace handlers instead of stacking.
    """
    handlers = [_console_handler(fmt_console, datefmt, colored)]
    if log_file is not None:
        handlers.append(_file_handler(log_file, fmt_file, datefmt))

    logging.basicConfig(level=coerce_level(level), handlers=handlers, force=True)

    for name, lvl in (module_levels or {}).items():
        logging.getLogger(name).setLevel(coerce_level(lvl))
