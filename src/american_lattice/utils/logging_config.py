"""Logging setup for entrypoints.

Library modules only do `logger = logging.getLogger(__name__)`; the CLI
(or any script/notebook) calls `setup_logging(...)` once.

The console handler injects `record.shortname` (last dotted component of the
logger name), so console formats may use `%(shortname)s`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping


class _AddShortNameFilter(logging.Filter):
    """Inject `record.shortname` without touching `record.name`."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.shortname = record.name.rsplit(".", 1)[-1]
        return True


class _ColorFormatter(logging.Formatter):
    """Console formatter coloring only the level name."""

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
    """Coerce `20`, `"20"`, `"info"` or `"WARN"` into a logging level int."""
    if isinstance(level, int):
        return level

    s = str(level).strip().upper()
    if not s:
        raise ValueError("Empty logging level")
    if s.isdigit():
        return int(s)
    if s == "WARN":
        return logging.WARNING

    value = logging.getLevelName(s)
    if not isinstance(value, int):
        raise ValueError(f"Unknown logging level: {level!r}")
    return value


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
    """Configure root logging once for a process.

    Parameters
    - level: Root level (int or name).
    - fmt_console: Console format; may use `%(shortname)s`.
    - fmt_file: File format, used only with `log_file`.
    - datefmt: Timestamp format.
    - log_file: Optional path; parent directories are created.
    - module_levels: Per-logger level overrides, e.g.
      `{"american_lattice.options.models.lattice": "DEBUG"}`.
    - colored: Colorize console level names (ANSI).

    Uses `force=True` so repeated calls replace previous handlers.
    """
    root_level = coerce_level(level)
    handlers: list[logging.Handler] = []

    console = logging.StreamHandler()
    console.addFilter(_AddShortNameFilter())
    formatter_cls = _ColorFormatter if colored else logging.Formatter
    console.setFormatter(formatter_cls(fmt=fmt_console, datefmt=datefmt))
    handlers.append(console)

    if log_file is not None:
        p = Path(log_file)
        p.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(p, encoding="utf-8")
        fh.setFormatter(logging.Formatter(fmt=fmt_file, datefmt=datefmt))
        handlers.append(fh)

    logging.basicConfig(level=root_level, handlers=handlers, force=True)

    if module_levels:
        for name, lvl in module_levels.items():
            logging.getLogger(name).setLevel(coerce_level(lvl))
