from __future__ import annotations

from enum import Enum


class PostType(str, Enum):
    EVENT = "event"
    VENUE = "venue"
    ORGANIZER = "organizer"
    TICKET = "ticket"


class PostStatus(str, Enum):
    PUBLISH = "publish"
    DRAFT = "draft"
    PENDING = "pending"
    PRIVATE = "private"
    TRASH = "trash"


class StockMode(str, Enum):
    OWN = "own"
    GLOBAL = "global"
    CAPPED = "capped"
    # Not part of the backend enumeration, but accepted for unlimited tickets.
    UNLIMITED = "unlimited"
