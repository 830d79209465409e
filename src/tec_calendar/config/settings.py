from __future__ import annotations

import os
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _bool_from_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _float_from_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class WordPressSettings:
    url: Optional[str]
    username: Optional[str]
    app_password: Optional[str]
    ignore_ssl_errors: bool = False
    enforce_per_page_limit: bool = True
    timeout_seconds: float = 30.0

    @property
    def is_configured(self) -> bool:
        return bool(self.url and self.username and self.app_password)

    @property
    def missing_env_vars(self) -> list[str]:
        missing = []
        if not self.url:
            missing.append("WP_URL")
        if not self.username:
            missing.append("WP_USERNAME")
        if not self.app_password:
            missing.append("WP_APP_PASSWORD")
        return missing

    @property
    def base_url(self) -> str:
        return (self.url or "").rstrip("/")


@dataclass(frozen=True)
class LoggingSettings:
    level: str
    log_file: Optional[str]


@dataclass(frozen=True)
class ServerSettings:
    name: str
    version: str
    http_host: str
    http_port: int


@dataclass(frozen=True)
class AppSettings:
    wordpress: WordPressSettings
    logging: LoggingSettings
    server: ServerSettings

    def with_overrides(
        self,
        *,
        url: Optional[str] = None,
        username: Optional[str] = None,
        app_password: Optional[str] = None,
        ignore_ssl_errors: Optional[bool] = None,
        log_level: Optional[str] = None,
        log_file: Optional[str] = None,
    ) -> "AppSettings":
        """Return a copy with command-line values layered over the environment."""

        wordpress = replace(
            self.wordpress,
            url=url or self.wordpress.url,
            username=username or self.wordpress.username,
            app_password=app_password or self.wordpress.app_password,
            ignore_ssl_errors=self.wordpress.ignore_ssl_errors if ignore_ssl_errors is None else ignore_ssl_errors,
        )
        logging_settings = replace(
            self.logging,
            level=log_level or self.logging.level,
            log_file=log_file or self.logging.log_file,
        )
        return replace(self, wordpress=wordpress, logging=logging_settings)


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    wordpress = WordPressSettings(
        url=os.getenv("WP_URL"),
        username=os.getenv("WP_USERNAME"),
        app_password=os.getenv("WP_APP_PASSWORD"),
        ignore_ssl_errors=_bool_from_env("WP_IGNORE_SSL_ERRORS", False),
        enforce_per_page_limit=_bool_from_env("WP_ENFORCE_PER_PAGE_LIMIT", True),
        timeout_seconds=_float_from_env("WP_TIMEOUT_SECONDS", 30.0),
    )

    logging_settings = LoggingSettings(
        level=os.getenv("LOG_LEVEL", "info"),
        log_file=os.getenv("LOG_FILE") or None,
    )

    server = ServerSettings(
        name=os.getenv("MCP_SERVER_NAME", "tec-mcp-server"),
        version=os.getenv("MCP_SERVER_VERSION", "1.0.0"),
        http_host=os.getenv("TEC_HTTP_HOST", "127.0.0.1"),
        http_port=int(os.getenv("TEC_HTTP_PORT", "8000")),
    )

    return AppSettings(wordpress=wordpress, logging=logging_settings, server=server)
