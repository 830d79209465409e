from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from ..config import AppSettings, get_settings
from ..core import DateParser, FlexibleDateParser
from ..data import WordPressGateway


@dataclass(slots=True)
class ServiceContext:
    """Shared collaborators handed to services at construction time."""

    settings: AppSettings = field(default_factory=get_settings)
    gateway: Optional[Any] = None
    parser: DateParser = field(default_factory=FlexibleDateParser)
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("tec_calendar"))

    def __post_init__(self) -> None:
        if self.gateway is None:
            self.gateway = WordPressGateway(self.settings.wordpress)
