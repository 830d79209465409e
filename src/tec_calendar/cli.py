from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from .api import api_state
from .bootstrap import configure_logging
from .config import AppSettings, get_settings
from .services import ServiceContext


def _add_connection_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("credentials", nargs="*", metavar="URL USERNAME APP_PASSWORD",
                        help="WordPress URL, username and application password (defaults to WP_* env vars).")
    parser.add_argument("--ignore-ssl-errors", action="store_true", default=None,
                        help="Skip TLS certificate verification (local development only).")
    parser.add_argument("--log-level", default=None,
                        help="One of error, warn, info, http, verbose, debug, silly.")
    parser.add_argument("--log-file", default=None, help="Also write logs to this file.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="The Events Calendar MCP adapter.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    mcp_parser = subparsers.add_parser("mcp", help="Start the MCP server.")
    _add_connection_arguments(mcp_parser)
    mcp_parser.add_argument("--transport", choices=("stdio", "streamable-http"), default="stdio")
    mcp_parser.add_argument("--host", default="127.0.0.1")
    mcp_parser.add_argument("--port", type=int, default=8765)

    api_parser = subparsers.add_parser("api", help="Start the HTTP function-call API.")
    _add_connection_arguments(api_parser)
    api_parser.add_argument("--host", default=None)
    api_parser.add_argument("--port", type=int, default=None)

    return parser


def resolve_settings(args: argparse.Namespace, base: Optional[AppSettings] = None) -> AppSettings:
    base = base or get_settings()
    credentials = list(args.credentials or [])
    if credentials and len(credentials) != 3:
        raise SystemExit("Incomplete command-line arguments: expected URL USERNAME APP_PASSWORD.")
    url, username, password = credentials if credentials else (None, None, None)
    return base.with_overrides(
        url=url,
        username=username,
        app_password=password,
        ignore_ssl_errors=args.ignore_ssl_errors,
        log_level=args.log_level,
        log_file=args.log_file,
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = resolve_settings(args)

    logger = configure_logging(
        settings.logging.level,
        log_file=settings.logging.log_file,
        secrets=(settings.wordpress.app_password,),
    )
    if not settings.wordpress.is_configured:
        logger.error("Missing required configuration: %s", ", ".join(settings.wordpress.missing_env_vars))
        sys.exit(1)
    if settings.wordpress.ignore_ssl_errors:
        logger.warning("SSL certificate verification is disabled. Use this only for local development.")

    api_state.configure(ServiceContext(settings=settings, logger=logger))
    logger.info("Starting %s v%s", settings.server.name, settings.server.version)

    if args.command == "mcp":
        from .services.mcp import run_mcp_server

        run_mcp_server(name=settings.server.name, transport=args.transport, host=args.host, port=args.port)
    elif args.command == "api":
        from .services.http import run_local_server

        run_local_server(host=args.host or settings.server.http_host, port=args.port or settings.server.http_port)
    else:  # pragma: no cover - argparse enforces choices
        parser.print_help()


if __name__ == "__main__":
    main()
