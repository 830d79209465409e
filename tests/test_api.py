import asyncio
import json

import pytest
from fastapi.testclient import TestClient

from tec_calendar.api import api_state, call_api, get_api_functions, register_api
from tec_calendar.api.registry import REGISTRY
from tec_calendar.services.http.server import app
from tec_calendar.services.mcp.server import build_mcp_server

TOOL_NAMES = {
    "calendar_create_update_entity",
    "calendar_read_entity",
    "calendar_delete_entity",
    "current_datetime",
    "list_available_tools",
}


@pytest.fixture
def configured(context):
    api_state.configure(context)
    yield context
    api_state._context = None
    api_state._entities = None
    api_state._clock = None


def test_all_tools_are_registered():
    assert {func.name for func in get_api_functions()} == TOOL_NAMES


def test_create_update_parameter_schema():
    schema = REGISTRY["calendar_create_update_entity"].parameter_schema
    assert schema == {
        "type": "object",
        "properties": {"post_type": {"type": "string"}, "data": {"type": "object"}, "id": {"type": "integer"}},
        "required": ["post_type", "data"],
    }


def test_delete_schema_carries_force_default():
    properties = REGISTRY["calendar_delete_entity"].parameter_schema["properties"]
    assert properties["force"] == {"type": "boolean", "default": False}


def test_register_api_rejects_duplicates_and_sync_functions():
    with pytest.raises(ValueError):
        register_api("current_datetime", description="", category="time")(REGISTRY["current_datetime"].func)

    def not_async():
        return None

    with pytest.raises(TypeError):
        register_api("sync_tool", description="", category="meta")(not_async)
    assert "sync_tool" not in REGISTRY


def test_list_available_tools():
    result = asyncio.run(call_api("list_available_tools"))
    names = [tool["name"] for tool in result["tools"]]
    assert names == sorted(TOOL_NAMES)
    read = next(tool for tool in result["tools"] if tool["name"] == "calendar_read_entity")
    assert read["parameters"] == {"post_type": "string", "id": "integer", "query": "string", "filters": "object"}
    assert result["post_types"] == ["event", "venue", "organizer", "ticket"]
    assert result["date_fields"]["sale_price_end_date"] == "YYYY-MM-DD"
    assert result["date_fields"]["start_date"] == "YYYY-MM-DD HH:MM:SS"


def test_list_available_tools_by_category():
    result = asyncio.run(call_api("list_available_tools", category="time"))
    assert [tool["name"] for tool in result["tools"]] == ["current_datetime"]


def test_unknown_function_raises_key_error():
    with pytest.raises(KeyError):
        asyncio.run(call_api("does_not_exist"))


def test_create_tool_returns_summary_and_entity(configured):
    result = asyncio.run(
        call_api("calendar_create_update_entity", post_type="venue", data={"title": "Town Hall", "city": "Leeds"})
    )
    assert result["summary"] == "Successfully created venue with ID: 501"
    assert result["entity"]["venue"] == "Town Hall"


def test_tool_errors_are_rendered_as_text(configured):
    result = asyncio.run(call_api("calendar_create_update_entity", post_type="ticket", data={"title": "GA"}))
    assert result == {
        "error": 'Error: Tickets must be associated with an event. Please provide either "event" or "event_id" '
        "field with the event ID."
    }


def test_date_errors_list_the_offending_fields(configured):
    result = asyncio.run(
        call_api(
            "calendar_create_update_entity",
            post_type="event",
            data={"title": "X", "start_date": "not a date", "end_date": "2025-01-01 10:00:00"},
        )
    )
    assert result["error"].startswith("Error 400: One or more date fields are invalid.")
    assert result["error"].endswith("(invalid_date_format) [start_date: 'not a date']")


def test_not_found_errors_carry_status(configured):
    result = asyncio.run(call_api("calendar_read_entity", post_type="event", id=9))
    assert result == {"error": "Error 404: Invalid post ID. (rest_post_invalid_id)"}


def test_delete_tool(configured):
    result = asyncio.run(call_api("calendar_delete_entity", post_type="event", id=123, force=True))
    assert result["summary"] == "Successfully permanently deleted event with ID: 123"
    assert result["entity"]["deleted"] is True


def test_unexpected_failures_are_logged_and_serialized(configured, gateway, caplog):
    async def explode(*args, **kwargs):
        raise RuntimeError("socket closed")

    gateway.list_posts = explode

    result = asyncio.run(call_api("calendar_read_entity", post_type="event"))

    assert result == {"error": "Error: socket closed"}
    assert "Unexpected failure" in caplog.text


def test_http_lists_functions():
    client = TestClient(app)
    response = client.get("/api/functions")
    assert response.status_code == 200
    assert {item["name"] for item in response.json()["functions"]} == TOOL_NAMES


def test_http_invokes_function(configured):
    client = TestClient(app)
    response = client.post("/api/functions/calendar_read_entity", json={"arguments": {"post_type": "event", "id": 123}})
    assert response.status_code == 200
    assert response.json()["result"]["summary"] == "Retrieved event with ID 123"


def test_http_reports_tool_errors_as_bad_request(configured):
    client = TestClient(app)
    response = client.post("/api/functions/calendar_delete_entity", json={"arguments": {"post_type": "show", "id": 1}})
    assert response.status_code == 400
    assert response.json()["result"]["error"].startswith("Error: Invalid request")


def test_http_unknown_function_and_bad_arguments():
    client = TestClient(app)
    assert client.post("/api/functions/nope", json={}).status_code == 404
    assert client.post("/api/functions/current_datetime", json={"arguments": {"bogus": 1}}).status_code == 400


def test_mcp_server_uses_configured_name():
    server = build_mcp_server("calendar-test")
    assert server.name == "calendar-test"


def test_schema_for_nested_annotations():
    from typing import List, Literal, Optional, Union

    from tec_calendar.api.registry import _schema_for

    assert _schema_for(Optional[List[int]]) == {"type": "array", "items": {"type": "integer"}}
    assert _schema_for(Literal["asc", "desc"]) == {"type": "string", "enum": ["asc", "desc"]}
    assert _schema_for(Union[int, str]) == {"anyOf": [{"type": "integer"}, {"type": "string"}]}


def test_http_describes_single_function():
    client = TestClient(app)
    response = client.get("/api/functions/calendar_delete_entity")
    assert response.status_code == 200
    assert response.json()["parameters"]["required"] == ["post_type", "id"]
    assert client.get("/api/functions/missing").status_code == 404


def test_mcp_server_publishes_time_and_info_resources(configured):
    from fastmcp import Client

    server = build_mcp_server("calendar-test")

    async def read_all():
        async with Client(server) as client:
            listed = await client.list_resources()
            contents = {}
            for uri in ("time://local", "time://server", "info://server"):
                [content] = await client.read_resource(uri)
                contents[uri] = json.loads(content.text)
            return {str(resource.uri) for resource in listed}, contents

    uris, contents = asyncio.run(read_all())

    assert {"time://local", "time://server", "info://server"} <= uris
    assert contents["time://server"]["timezone"] == "America/New_York"
    assert set(contents["time://local"]) >= {"datetime", "timezone", "utc_offset_seconds"}
    assert contents["info://server"]["name"] == "tec-mcp-server"
    assert contents["info://server"]["supported_post_types"] == ["event", "venue", "organizer", "ticket"]
    assert "calendar_read_entity" in [tool["name"] for tool in contents["info://server"]["tools"]]


def test_server_time_resource_falls_back_to_local(configured, gateway):
    from tec_calendar.api.resources import server_time

    async def unavailable():
        raise ConnectionError("offline")

    gateway.get_site_info = unavailable

    info = asyncio.run(server_time())

    assert info["timezone"] == "Server timezone unavailable (using local time as fallback)"
