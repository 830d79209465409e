"""Data access layer."""

from __future__ import annotations

from .endpoints import ENDPOINTS, build_endpoint
from .wordpress import WordPressGateway, WordPressNotConfiguredError

__all__ = ["ENDPOINTS", "WordPressGateway", "WordPressNotConfiguredError", "build_endpoint"]
