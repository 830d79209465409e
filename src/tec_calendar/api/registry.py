from __future__ import annotations

import inspect
import types
from dataclasses import dataclass
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    Iterable,
    List,
    Literal,
    Optional,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

JsonSchema = Dict[str, Any]
ToolFunction = Callable[..., Awaitable[Any]]

_SCALARS: Dict[Any, str] = {
    str: "string",
    int: "integer",
    float: "number",
    bool: "boolean",
    dict: "object",
    list: "array",
}


def _schema_for(annotation: Any) -> JsonSchema:
    """Translate a tool parameter annotation into a JSON schema fragment."""

    origin = get_origin(annotation)
    if origin is None:
        return {"type": _SCALARS.get(annotation, "string")}
    if origin is Literal:
        return {"type": "string", "enum": [str(value) for value in get_args(annotation)]}
    if origin in (list, List):
        args = get_args(annotation)
        return {"type": "array", "items": _schema_for(args[0])} if args else {"type": "array"}
    if origin in (dict, Dict):
        return {"type": "object"}
    if origin in (Union, types.UnionType):
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        return _schema_for(args[0]) if len(args) == 1 else {"anyOf": [_schema_for(arg) for arg in args]}
    return {"type": "string"}


@dataclass(frozen=True)
class ApiFunction:
    name: str
    func: ToolFunction
    description: str
    category: str
    tags: tuple[str, ...]
    signature: inspect.Signature

    def _hints(self) -> Dict[str, Any]:
        try:
            return get_type_hints(self.func)
        except (NameError, TypeError):
            return {}

    def _annotation(self, param: inspect.Parameter, hints: Dict[str, Any]) -> Any:
        return hints.get(param.name, param.annotation)

    @property
    def parameters(self) -> Dict[str, str]:
        """Parameter name to JSON type, for compact tool listings."""

        hints = self._hints()
        return {
            param.name: _schema_for(self._annotation(param, hints)).get("type", "any")
            for param in self.signature.parameters.values()
        }

    @property
    def parameter_schema(self) -> JsonSchema:
        hints = self._hints()
        schema: JsonSchema = {"type": "object", "properties": {}, "required": []}
        for param in self.signature.parameters.values():
            prop = _schema_for(self._annotation(param, hints))
            if param.default is not inspect.Parameter.empty and isinstance(param.default, (str, int, float, bool)):
                prop["default"] = param.default
            schema["properties"][param.name] = prop
            if param.default is inspect.Parameter.empty:
                schema["required"].append(param.name)
        if not schema["required"]:
            schema.pop("required")
        return schema


REGISTRY: Dict[str, ApiFunction] = {}


def register_api(
    name: str,
    *,
    description: str,
    category: str,
    tags: Optional[Iterable[str]] = None,
) -> Callable[[ToolFunction], ToolFunction]:
    """Register a coroutine as a tool exposed over MCP and HTTP."""

    def decorator(func: ToolFunction) -> ToolFunction:
        if name in REGISTRY:
            raise ValueError(f"API function '{name}' is already registered.")
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"API function '{name}' must be a coroutine function.")
        REGISTRY[name] = ApiFunction(
            name=name,
            func=func,
            description=description,
            category=category,
            tags=tuple(tags or ()),
            signature=inspect.signature(func),
        )
        return func

    return decorator


def get_api_functions(category: Optional[str] = None) -> List[ApiFunction]:
    functions = list(REGISTRY.values())
    if category is not None:
        functions = [func for func in functions if func.category == category]
    return functions


async def call_api(name: str, **kwargs: Any) -> Any:
    try:
        api_function = REGISTRY[name]
    except KeyError:
        raise KeyError(f"API function '{name}' is not registered.") from None
    return await api_function.func(**kwargs)


@dataclass(frozen=True)
class ApiResource:
    uri: str
    name: str
    func: ToolFunction
    description: str
    mime_type: str = "application/json"


RESOURCES: Dict[str, ApiResource] = {}


def register_resource(uri: str, *, name: str, description: str) -> Callable[[ToolFunction], ToolFunction]:
    """Register a coroutine as a read-only MCP resource at ``uri``."""

    def decorator(func: ToolFunction) -> ToolFunction:
        if uri in RESOURCES:
            raise ValueError(f"Resource '{uri}' is already registered.")
        RESOURCES[uri] = ApiResource(uri=uri, name=name, func=func, description=description)
        return func

    return decorator


def get_api_resources() -> List[ApiResource]:
    return list(RESOURCES.values())
