from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..core import (
    EndDateCapper,
    SaleWindowResolver,
    apply_default_status,
    needs_sale_window,
    normalize_date_fields,
    require_creation_fields,
    transform_fields,
)
from ..core.validation import validate_payload
from ..domain import ClientInputError, DateFormatError, EntityResult, PostType
from ..domain.models import entity_id
from ..domain.schemas import CreateUpdateInput, DeleteInput, ReadInput
from .context import ServiceContext

InputT = TypeVar("InputT", bound=BaseModel)


def parse_input(model: Type[InputT], arguments: Mapping[str, Any]) -> InputT:
    try:
        return model.model_validate(dict(arguments))
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in item['loc']) or 'input'}: {item['msg']}" for item in exc.errors()
        )
        raise ClientInputError(f"Invalid request: {problems}") from exc


def _plural(post_type: PostType, count: int) -> str:
    return post_type.value if count == 1 else f"{post_type.value}s"


@dataclass(slots=True)
class EntityService:
    """Runs create, update, read and delete requests against the gateway."""

    context: ServiceContext
    resolver: SaleWindowResolver = field(init=False)
    capper: EndDateCapper = field(init=False)

    def __post_init__(self) -> None:
        self.resolver = SaleWindowResolver(self.context.gateway, self.context.logger)
        self.capper = EndDateCapper(self.context.gateway, self.context.logger)

    @property
    def gateway(self) -> Any:
        return self.context.gateway

    async def create_update(self, arguments: Mapping[str, Any]) -> EntityResult:
        request = parse_input(CreateUpdateInput, arguments)
        post_type, post_id, raw = request.post_type, request.id, request.data
        creating = post_id is None
        logger = self.context.logger
        logger.debug("%s %s (keys=%s)", "Creating" if creating else "Updating", post_type.value, sorted(raw))

        transformed = transform_fields(post_type, raw, creating=creating)
        payload, invalid_dates = normalize_date_fields(transformed.payload, self.context.parser)
        if invalid_dates:
            raise DateFormatError(
                "One or more date fields are invalid. Please use a valid date or the preferred format "
                "YYYY-MM-DD HH:MM:SS.",
                invalid_dates,
            )

        if creating:
            require_creation_fields(post_type, payload)
            if needs_sale_window(post_type, payload, creating=creating):
                payload = await self.resolver.resolve(payload)

        canonical = apply_default_status(validate_payload(post_type, payload))
        logger.info("%s %s%s", "Creating" if creating else "Updating", post_type.value, "" if creating else f" with ID {post_id}")

        if creating:
            result = await self.gateway.create_post(post_type, canonical)
            if post_type is PostType.TICKET:
                result = await self.capper.apply(raw, result)
        else:
            result = await self.gateway.update_post(post_type, post_id, canonical)

        summary = f"Successfully {'created' if creating else 'updated'} {post_type.value} with ID: {entity_id(result)}"
        logger.info(summary)
        return EntityResult(summary=summary, entity=result)

    async def read(self, arguments: Mapping[str, Any]) -> EntityResult:
        request = parse_input(ReadInput, arguments)
        post_type = request.post_type
        if request.id:
            entity = await self.gateway.get_post(post_type, request.id)
            return EntityResult(summary=f"Retrieved {post_type.value} with ID {request.id}", entity=entity)

        filters: Dict[str, Any] = request.filters.model_dump(exclude_none=True) if request.filters else {}
        search: Optional[str] = request.query or filters.get("search")
        if search:
            filters.pop("search", None)
            posts = await self.gateway.search_posts(post_type, search, filters)
        else:
            posts = await self.gateway.list_posts(post_type, filters)
        count = len(posts)
        summary = f"Found {count} {_plural(post_type, count)}"
        if search:
            summary += f' matching "{search}"'
        return EntityResult(summary=summary, entity=posts)

    async def delete(self, arguments: Mapping[str, Any]) -> EntityResult:
        request = parse_input(DeleteInput, arguments)
        result = await self.gateway.delete_post(request.post_type, request.id, request.force)
        action = "permanently deleted" if request.force else "moved to trash"
        self.context.logger.info("Deleted %s %s (force=%s)", request.post_type.value, request.id, request.force)
        return EntityResult(
            summary=f"Successfully {action} {request.post_type.value} with ID: {request.id}",
            entity=result,
        )
