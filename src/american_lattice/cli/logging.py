from __future__ import annotations

from typing import Any, Mapping

from american_lattice.utils.logging_config import setup_logging


DEFAULT_LOGGING: dict[str, Any] = {
    "level": "INFO",
    "format": "%(asctime)s %(levelname)s %(shortname)s - %(message)s",
    "file": None,
    "color": True,
    "modules": {},
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


def collect_logging_overrides(args) -> dict[str, Any]:
    """Collect the logging section overrides from parsed CLI args."""
    overrides: dict[str, Any] = {}
    if getattr(args, "log_level", None):
        overrides["level"] = args.log_level
    if getattr(args, "log_file", None):
        overrides["file"] = args.log_file
    if getattr(args, "log_format", None):
        overrides["format"] = args.log_format
    if getattr(args, "log_color", None) is not None:
        overrides["color"] = args.log_color
    return overrides


def _normalize_logging_config(
    config: Mapping[str, Any] | None
) -> dict[str, Any]:
    merged = dict(DEFAULT_LOGGING)
    if not config:
        return merged

    for key in ("level", "format", "file", "color", "modules"):
        if key in config and config[key] is not None:
            merged[key] = config[key]
    return merged


def setup_logging_from_config(config: Mapping[str, Any] | None) -> None:
    log_cfg = _normalize_logging_config(config)
    setup_logging(
        log_cfg["level"],
        fmt_console=log_cfg["format"],
        log_file=log_cfg["file"],
        module_levels=log_cfg["modules"] or None,
        colored=log_cfg["color"],
    )
