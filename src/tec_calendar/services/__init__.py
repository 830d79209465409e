"""Application services orchestrating gateway access and payload rules."""

from __future__ import annotations

from .clock import ClockService
from .context import ServiceContext
from .entities import EntityService

__all__ = ["ClockService", "EntityService", "ServiceContext"]
