from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..services import ClockService, EntityService, ServiceContext


@dataclass(slots=True)
class ApiState:
    """Lazily wires services so importing the API never needs credentials."""

    _context: Optional[ServiceContext] = None
    _entities: Optional[EntityService] = field(default=None, init=False)
    _clock: Optional[ClockService] = field(default=None, init=False)

    def configure(self, context: ServiceContext) -> None:
        self._context = context
        self._entities = None
        self._clock = None

    @property
    def context(self) -> ServiceContext:
        if self._context is None:
            self._context = ServiceContext()
        return self._context

    @property
    def entities(self) -> EntityService:
        if self._entities is None:
            self._entities = EntityService(self.context)
        return self._entities

    @property
    def clock(self) -> ClockService:
        if self._clock is None:
            self._clock = ClockService(self.context)
        return self._clock


api_state = ApiState()
