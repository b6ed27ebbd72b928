"""Command-line entry point: run the API server or maintenance tasks."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from portfolio_cms.config import get_settings


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="portfolio-cms", description="Portfolio CMS backend")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    serve = commands.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8000)
    serve.add_argument("--reload", action="store_true", help="Restart on code changes")

    sweep = commands.add_parser(
        "sweep-orphans", help="Delete uploaded files that no record references"
    )
    sweep.add_argument(
        "--min-age",
        type=float,
        default=None,
        help="Only delete files older than this many seconds (default from settings)",
    )
    return parser


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("portfolio_cms.api.main:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def _sweep(args: argparse.Namespace) -> int:
    from portfolio_cms.services.reconcile import sweep_orphaned_files

    removed = sweep_orphaned_files(min_age=args.min_age)
    if not removed:
        print("No orphaned files found.")
        return 0
    for category, filenames in removed.items():
        for filename in filenames:
            print(f"removed {category}/{filename}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments and run the selected command.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger(__name__).debug("Upload root: %s", get_settings().upload_root)
    if args.command == "serve":
        return _serve(args)
    return _sweep(args)


if __name__ == "__main__":
    raise SystemExit(main())
