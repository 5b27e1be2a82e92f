"""Shared CLI helper utilities for app entrypoints."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any


def add_print_config_arg(parser) -> None:
    """Add a `--print-config` flag to a parser."""
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Print merged config (JSON) and exit.",
    )


def add_dry_run_arg(parser) -> None:
    """Add a `--dry-run` flag to a parser."""
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate config and log the plan without pricing anything.",
    )


def _normalize(obj: Any) -> Any:
    """Convert paths/mappings/sequences to JSON-serializable structures."""
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, Mapping):
        return {str(k): _normalize(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set)):
        return [_normalize(v) for v in obj]
    return obj


def print_config(config: Mapping[str, Any]) -> None:
    """Pretty-print merged config as deterministic JSON."""
    print(json.dumps(_normalize(config), indent=2, sort_keys=True))


def log_dry_run(logger, plan: Mapping[str, Any]) -> None:
    """Log the dry-run plan as formatted JSON."""
    logger.info("DRY RUN: nothing was priced.")
    logger.info(
        "DRY RUN plan:\n%s", json.dumps(_normalize(plan), indent=2, sort_keys=True)
    )
