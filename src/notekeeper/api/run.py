from __future__ import annotations
import argparse
from typing import Optional, Sequence
from notekeeper.core.config import get_settings
import uvicorn


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(prog="notekeeper-api", description="Serve the notekeeper REST API.")
    parser.add_argument("--host", default=settings.api_host, help="bind address (API_HOST)")
    parser.add_argument("--port", type=int, default=settings.api_port, help="bind port (API_PORT)")
    parser.add_argument("--log-level", default=settings.log_level, help="log level (LOG_LEVEL)")
    parser.add_argument("--reload", action="store_true", help="restart on code changes (development only)")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    uvicorn.run(
        "notekeeper.api.main:app",
        host=args.host,
        port=args.port,
        log_level=args.log_level.lower(),
        # logging is configured by the app itself
        log_config=None,
        reload=args.reload,
    )


if __name__ == "__main__":  # pragma: no cover
    main()
