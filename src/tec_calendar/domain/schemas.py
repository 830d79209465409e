"""Pydantic shapes for tool inputs and outbound request payloads."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field

from .enums import PostStatus, PostType
from .models import DATE_PATTERN, DATETIME_PATTERN

Number = Union[int, float]


class _ToolInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    post_type: PostType = Field(alias="postType")


class CreateUpdateInput(_ToolInput):
    id: Optional[int] = Field(default=None, gt=0)
    data: Dict[str, Any]


class ReadFilters(BaseModel):
    model_config = ConfigDict(extra="allow")

    page: Optional[int] = None
    per_page: Optional[int] = None
    search: Optional[str] = None
    order: Optional[Literal["asc", "desc"]] = None
    orderby: Optional[str] = None
    status: Optional[Union[str, List[str]]] = None
    include: Optional[List[int]] = None
    exclude: Optional[List[int]] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    venue: Optional[int] = None
    organizer: Optional[int] = None


class ReadInput(_ToolInput):
    id: Optional[int] = Field(default=None, gt=0)
    query: Optional[str] = None
    filters: Optional[ReadFilters] = None


class DeleteInput(_ToolInput):
    id: int = Field(gt=0)
    force: bool = False


class PostRequest(BaseModel):
    """Fields every post type accepts on create/update."""

    model_config = ConfigDict(extra="allow")

    title: Optional[str] = None
    status: Optional[PostStatus] = None
    slug: Optional[str] = None
    excerpt: Optional[str] = None
    content: Optional[str] = None


class EventRequest(PostRequest):
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    start_date_utc: Optional[str] = None
    end_date_utc: Optional[str] = None
    all_day: Optional[bool] = None
    timezone: Optional[str] = None
    venue: Optional[Union[int, List[int]]] = None
    organizer: Optional[Union[int, List[int]]] = None
    organizers: Optional[List[int]] = None
    cost: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None
    categories: Optional[List[int]] = None
    tags: Optional[List[int]] = None


class VenueRequest(PostRequest):
    venue: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state_province: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None


class OrganizerRequest(PostRequest):
    organizer: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    email: Optional[str] = None


class TicketRequest(PostRequest):
    type: Optional[Literal["tribe_rsvp_tickets", "tec_tc_ticket", "default"]] = None
    event: Optional[int] = None
    event_id: Optional[int] = None
    provider: Optional[str] = None
    price: Optional[Union[Number, str]] = None
    sale_price: Optional[Union[Number, str]] = None
    sale_price_start_date: Optional[str] = Field(default=None, pattern=DATE_PATTERN)
    sale_price_end_date: Optional[str] = Field(default=None, pattern=DATE_PATTERN)
    stock: Optional[Number] = None
    capacity: Optional[Number] = None
    event_capacity: Optional[Number] = None
    sku: Optional[str] = None
    start_date: Optional[str] = Field(default=None, pattern=DATETIME_PATTERN)
    end_date: Optional[str] = Field(default=None, pattern=DATETIME_PATTERN)
    manage_stock: Optional[bool] = None
    show_description: Optional[bool] = None
    description: Optional[str] = None
    stock_mode: Optional[Literal["own", "global", "capped", "unlimited"]] = None
    attendee_collection: Optional[Literal["allowed", "required", "disabled"]] = None


REQUEST_SCHEMAS: Dict[PostType, Type[PostRequest]] = {
    PostType.EVENT: EventRequest,
    PostType.VENUE: VenueRequest,
    PostType.ORGANIZER: OrganizerRequest,
    PostType.TICKET: TicketRequest,
}


def request_schema_for(post_type: PostType) -> Type[PostRequest]:
    return REQUEST_SCHEMAS[PostType(post_type)]
