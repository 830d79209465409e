"""Public tool surface for MCP and HTTP callers."""

from __future__ import annotations

from .registry import ApiFunction, ApiResource, call_api, get_api_functions, get_api_resources, register_api
from .state import api_state

# Import tool and resource modules so decorators run at module import time.
from . import endpoints, meta, resources  # noqa: F401

__all__ = [
    "ApiFunction",
    "ApiResource",
    "api_state",
    "call_api",
    "get_api_functions",
    "get_api_resources",
    "register_api",
]
