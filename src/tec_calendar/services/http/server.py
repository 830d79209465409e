from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ...api import ApiFunction, call_api, get_api_functions

logger = logging.getLogger(__name__)

app = FastAPI(title="TEC Calendar API", version="1.0.0")


class ApiCallRequest(BaseModel):
    arguments: Dict[str, Any] = Field(default_factory=dict)


def _serialize_api_function(api_function: ApiFunction) -> dict:
    return {
        "name": api_function.name,
        "description": api_function.description,
        "category": api_function.category,
        "tags": list(api_function.tags),
        "parameters": api_function.parameter_schema,
    }


@app.get("/api/functions")
async def list_api_functions() -> JSONResponse:
    functions = [_serialize_api_function(func) for func in get_api_functions()]
    return JSONResponse({"functions": functions})


@app.get("/api/functions/{function_name}")
async def describe_api_function(function_name: str) -> JSONResponse:
    matches = [func for func in get_api_functions() if func.name == function_name]
    if not matches:
        raise HTTPException(status_code=404, detail=f"API function '{function_name}' is not registered.")
    return JSONResponse(_serialize_api_function(matches[0]))


@app.post("/api/functions/{function_name}")
async def invoke_api_function(function_name: str, request: ApiCallRequest) -> JSONResponse:
    try:
        result = await call_api(function_name, **request.arguments)
    except KeyError as exc:
        logger.warning("API function not found: %s", function_name)
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except TypeError as exc:
        logger.warning("Bad arguments for %s: %s", function_name, exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    status_code = 400 if isinstance(result, dict) and "error" in result else 200
    logger.debug("API function %s finished with status %s", function_name, status_code)
    return JSONResponse({"name": function_name, "result": result}, status_code=status_code)


def run_local_server(host: str = "127.0.0.1", port: int = 8000) -> None:
    import asyncio

    from hypercorn.asyncio import serve
    from hypercorn.config import Config

    config = Config()
    config.bind = [f"{host}:{port}"]
    asyncio.run(serve(app, config))
