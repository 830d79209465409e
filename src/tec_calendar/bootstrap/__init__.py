"""Application bootstrap helpers."""

from __future__ import annotations

from .logging import RedactingFilter, configure_logging, resolve_level

__all__ = ["RedactingFilter", "configure_logging", "resolve_level"]
