"""Shared fixtures for the calendar adapter tests."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple

import pytest

from tec_calendar.config import AppSettings, LoggingSettings, ServerSettings, WordPressSettings
from tec_calendar.core import FlexibleDateParser
from tec_calendar.domain import NotFoundError, PostType
from tec_calendar.services import EntityService, ServiceContext

FIXED_NOW = datetime(2024, 7, 10, 14, 30, 0)  # a Wednesday


class FakeGateway:
    """In-memory stand-in for the WordPress gateway that records every call."""

    def __init__(self, posts: Optional[Dict[Tuple[str, int], Dict[str, Any]]] = None) -> None:
        self.posts: Dict[Tuple[str, int], Dict[str, Any]] = dict(posts or {})
        self.calls: List[Tuple[str, Any]] = []
        self.next_id = 500
        self.fail_get: Optional[Exception] = None
        self.created_overrides: Dict[str, Any] = {}
        self.site_info: Dict[str, Any] = {"timezone_string": "America/New_York"}

    @staticmethod
    def _key(post_type: Any, post_id: Any) -> Tuple[str, int]:
        return PostType(post_type).value, int(post_id)

    def calls_named(self, name: str) -> List[Any]:
        return [args for call, args in self.calls if call == name]

    async def get_post(self, post_type: PostType, post_id: int) -> Dict[str, Any]:
        self.calls.append(("get_post", (PostType(post_type).value, post_id)))
        if self.fail_get is not None:
            raise self.fail_get
        key = self._key(post_type, post_id)
        if key not in self.posts:
            raise NotFoundError("Invalid post ID.", 404, "rest_post_invalid_id")
        return dict(self.posts[key])

    async def list_posts(self, post_type: PostType, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        self.calls.append(("list_posts", (PostType(post_type).value, dict(filters or {}))))
        kind = PostType(post_type).value
        return [dict(post) for (stored_kind, _), post in self.posts.items() if stored_kind == kind]

    async def search_posts(
        self, post_type: PostType, query: str, filters: Optional[Mapping[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        self.calls.append(("search_posts", (PostType(post_type).value, query, dict(filters or {}))))
        kind = PostType(post_type).value
        return [
            dict(post)
            for (stored_kind, _), post in self.posts.items()
            if stored_kind == kind and query.lower() in str(post.get("title", "")).lower()
        ]

    async def create_post(self, post_type: PostType, payload: Mapping[str, Any]) -> Dict[str, Any]:
        self.calls.append(("create_post", (PostType(post_type).value, dict(payload))))
        self.next_id += 1
        entity = {"id": self.next_id, **payload, **self.created_overrides}
        self.posts[self._key(post_type, self.next_id)] = entity
        return dict(entity)

    async def update_post(self, post_type: PostType, post_id: int, payload: Mapping[str, Any]) -> Dict[str, Any]:
        self.calls.append(("update_post", (PostType(post_type).value, post_id, dict(payload))))
        key = self._key(post_type, post_id)
        entity = {**self.posts.get(key, {"id": post_id}), **payload}
        self.posts[key] = entity
        return dict(entity)

    async def delete_post(self, post_type: PostType, post_id: int, force: bool = False) -> Dict[str, Any]:
        self.calls.append(("delete_post", (PostType(post_type).value, post_id, force)))
        previous = self.posts.pop(self._key(post_type, post_id), {"id": post_id})
        return {"deleted": True, "previous": previous}

    async def get_site_info(self) -> Dict[str, Any]:
        self.calls.append(("get_site_info", ()))
        return dict(self.site_info)


def make_settings(**wordpress: Any) -> AppSettings:
    values = {"url": "https://example.test", "username": "editor", "app_password": "abcd efgh ijkl"}
    values.update(wordpress)
    return AppSettings(
        wordpress=WordPressSettings(**values),
        logging=LoggingSettings(level="debug", log_file=None),
        server=ServerSettings(name="tec-mcp-server", version="1.0.0", http_host="127.0.0.1", http_port=8000),
    )


@pytest.fixture
def settings() -> AppSettings:
    return make_settings()


@pytest.fixture
def parser() -> FlexibleDateParser:
    return FlexibleDateParser(clock=lambda: FIXED_NOW)


@pytest.fixture
def event_post() -> Dict[str, Any]:
    return {"id": 123, "title": "Summer Music Festival", "start_date": "2024-07-15 18:00:00", "end_date": "2024-07-15 23:00:00"}


@pytest.fixture
def gateway(event_post: Dict[str, Any]) -> FakeGateway:
    return FakeGateway({("event", 123): event_post})


@pytest.fixture
def context(settings: AppSettings, gateway: FakeGateway, parser: FlexibleDateParser) -> ServiceContext:
    return ServiceContext(settings=settings, gateway=gateway, parser=parser, logger=logging.getLogger("tests"))


@pytest.fixture
def service(context: ServiceContext) -> EntityService:
    return EntityService(context)
