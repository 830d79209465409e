from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

import httpx

from ..config.settings import WordPressSettings
from ..domain import ApiError, GatewayError, PostType, TransportError
from .endpoints import build_endpoint, list_key

logger = logging.getLogger(__name__)

MAX_PER_PAGE = 100


class WordPressNotConfiguredError(GatewayError):
    """Raised when the gateway is used without URL or credentials."""


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(str(item) for item in value)
    return str(value)


@dataclass(frozen=True)
class WordPressGateway:
    """Authenticated access to The Events Calendar REST endpoints.

    The gateway only holds connection settings; every call opens its own
    ``httpx.AsyncClient`` so one instance can serve concurrent requests.
    """

    settings: WordPressSettings
    transport: Optional[httpx.AsyncBaseTransport] = None

    def _client(self) -> httpx.AsyncClient:
        if not self.settings.is_configured:
            missing = ", ".join(self.settings.missing_env_vars)
            raise WordPressNotConfiguredError(f"WordPress connection is not configured (missing {missing}).")
        return httpx.AsyncClient(
            base_url=self.settings.base_url,
            auth=httpx.BasicAuth(self.settings.username or "", self.settings.app_password or ""),
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            timeout=httpx.Timeout(self.settings.timeout_seconds),
            verify=not self.settings.ignore_ssl_errors,
            transport=self.transport,
        )

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, str]] = None,
        json: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        logger.debug("%s %s params=%s", method, path, params)
        try:
            async with self._client() as client:
                response = await client.request(method, path, params=params, json=json)
        except httpx.HTTPError as exc:
            raise TransportError(f"Request to {path} failed: {exc}") from exc

        try:
            data = response.json()
        except ValueError:
            data = None

        if response.is_error:
            logger.debug("%s %s returned %s", method, path, response.status_code)
            if isinstance(data, dict):
                raise ApiError.from_wp_error(data, response.status_code)
            raise ApiError(
                f"Unexpected response from WordPress ({response.status_code})",
                response.status_code,
            )
        if data is None:
            raise ApiError("WordPress returned a non-JSON response", response.status_code, "invalid_json")
        return data

    def _list_params(self, filters: Optional[Mapping[str, Any]]) -> Dict[str, str]:
        params: Dict[str, str] = {}
        for key, value in (filters or {}).items():
            if value is None:
                continue
            if key == "per_page" and self.settings.enforce_per_page_limit:
                value = min(int(value), MAX_PER_PAGE)
            params[key] = _query_value(value)
        return params

    async def get_post(self, post_type: PostType, post_id: int) -> Dict[str, Any]:
        return await self._request("GET", build_endpoint(post_type, post_id))

    async def list_posts(self, post_type: PostType, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        data = await self._request("GET", build_endpoint(post_type), params=self._list_params(filters))
        if isinstance(data, dict):
            items = data.get(list_key(post_type))
            return list(items) if isinstance(items, list) else [data]
        return list(data)

    async def search_posts(
        self,
        post_type: PostType,
        query: str,
        filters: Optional[Mapping[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        return await self.list_posts(post_type, {**(filters or {}), "search": query})

    async def create_post(self, post_type: PostType, payload: Mapping[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", build_endpoint(post_type), json=payload)

    async def update_post(self, post_type: PostType, post_id: int, payload: Mapping[str, Any]) -> Dict[str, Any]:
        return await self._request("PUT", build_endpoint(post_type, post_id), json=payload)

    async def delete_post(self, post_type: PostType, post_id: int, force: bool = False) -> Dict[str, Any]:
        params = {"force": "true"} if force else None
        return await self._request("DELETE", build_endpoint(post_type, post_id), params=params)

    async def get_site_info(self) -> Dict[str, Any]:
        return await self._request("GET", "/wp-json")
