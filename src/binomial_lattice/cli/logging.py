from __future__ import annotations

from typing import Any, Mapping

from binomial_lattice.utils.logging_config import setup_logging

DEFAULT_LOGGING: dict[str, Any] = {
    "level": "INFO",
    "format": "%(asctime)s %(levelname)s %(shortname)s - %(message)s",
    "file": None,
    "color": True,
}

# Older config files spell these keys after `setup_logging`'s arguments.
_LEGACY_KEYS: dict[str, str] = {
    "fmt_console": "format",
    "log_file": "file",
    "colored": "color",
}


def add_logging_args(parser) -> None:
    group = parser.add_argument_group("logging")
    group.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (e.g., INFO, DEBUG).",
    )
    group.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Optional log file path.",
    )
    group.add_argument(
        "--log-format",
        type=str,
        default=None,
        help="Console log format string.",
    )
    group.add_argument(
        "--color",
        dest="log_color",
        action="store_true",
        help="Enable colored console logs.",
    )
    group.add_argument(
        "--no-color",
        dest="log_color",
        action="store_false",
        help="Disable colored console logs.",
    )
    parser.set_defaults(log_color=None)


def _normalize_logging_config(config: Mapping[str, Any] | None) -> dict[str, Any]:
    merged = dict(DEFAULT_LOGGING)
    if not config:
        return merged

    for key in DEFAULT_LOGGING:
        if config.get(key) is not None:
            merged[key] = config[key]

    for legacy, key in _LEGACY_KEYS.items():
        if config.get(legacy) is not None:
            merged[key] = config[legacy]

    return merged


def setup_logging_from_config(config: Mapping[str, Any] | None) -> None:
    log_cfg = _normalize_logging_config(config)
    setup_logging(
        log_cfg["level"],
        fmt_console=log_cfg["format"],
        log_file=log_cfg["file"],
        colored=log_cfg["color"],
    )
