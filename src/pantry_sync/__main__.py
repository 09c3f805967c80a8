"""CLI entrypoint for PantryTerm."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from importlib import metadata
from pathlib import Path
from typing import Any

from .app import PantryApp
from .config import ensure_config_dir, load_config
from .exceptions import ConfigValidationError


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pantryterm",
        description="PantryTerm - Terminal view of a shared ingredient list",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to an alternative config.toml",
    )
    parser.add_argument(
        "--server",
        default=None,
        help="Base URL of the ingredient server (overrides server.base_url)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Ensure configuration exists, handle CLI flags, and run the TUI."""

    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.version:
        try:
            version = metadata.version("pantryterm")
        except metadata.PackageNotFoundError:
            version = "0.0.0"
        print(f"pantryterm {version}")
        return

    ensure_config_dir()
    overrides: dict[str, Any] = {}
    if args.server:
        overrides["server"] = {"base_url": args.server}
    try:
        config = load_config(args.config, overrides=overrides)
    except ConfigValidationError as exc:
        parser.error(str(exc))
    app = PantryApp(config=config)
    app.run()


if __name__ == "__main__":
    main()
