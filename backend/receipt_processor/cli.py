"""Command line entry point: serve the receipt points API with uvicorn."""

from __future__ import annotations

import argparse
from typing import List, Optional

import uvicorn

from receipt_processor.core.config import settings

APP_PATH = "receipt_processor.api.main:app"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="receipt-processor",
        description="Serve the receipt points API.",
    )
    parser.add_argument("--host", default=settings.HOST, help="Interface to bind (default: %(default)s)")
    parser.add_argument("--port", type=int, default=settings.PORT, help="TCP port to bind (default: %(default)s)")
    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL.lower(),
        choices=["critical", "error", "warning", "info", "debug"],
        help="Uvicorn log level (default: %(default)s)",
    )
    parser.add_argument("--reload", action="store_true", help="Reload on code changes (development only)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    # uvicorn exits the process with status 1 when the port cannot be bound
    uvicorn.run(
        APP_PATH,
        host=args.host,
        port=args.port,
        log_level=args.log_level,
        reload=args.reload,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
