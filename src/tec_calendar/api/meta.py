from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..core.dates import DATE_FIELDS, DATE_ONLY_FIELDS
from ..domain import PostType
from .registry import get_api_functions, register_api


def _describe(func) -> Dict[str, Any]:
    return {
        "name": func.name,
        "description": func.description.splitlines()[0],
        "category": func.category,
        "tags": list(func.tags),
        "parameters": func.parameters,
    }


@register_api(
    "list_available_tools",
    description="List the calendar tools, the post types they manage, and the accepted date fields.",
    category="meta",
    tags=("tools", "metadata"),
)
async def list_available_tools(category: Optional[str] = None) -> Dict[str, Any]:
    functions = sorted(get_api_functions(category), key=lambda item: item.name)
    tools: List[Dict[str, Any]] = [_describe(func) for func in functions]
    return {
        "tools": tools,
        "post_types": [post_type.value for post_type in PostType],
        "date_fields": {
            field: "YYYY-MM-DD" if field in DATE_ONLY_FIELDS else "YYYY-MM-DD HH:MM:SS" for field in DATE_FIELDS
        },
    }
