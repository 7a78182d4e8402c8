"""
Shared payload models and list-query options.

Responses are parsed into pydantic models that ignore unknown fields, so
the service can add fields without breaking older clients. Request
models forbid unknown fields so typos surface before a round-trip.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Generic, Literal, Mapping, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")

SortDirection = Literal["asc", "desc"]


class ResponseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class RequestModel(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    def to_body(self) -> dict[str, Any]:
        """JSON body in field declaration order, without unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Page(ResponseModel, Generic[T]):
    data: list[T] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 0


@dataclass(frozen=True)
class QueryOptions:
    """
    Pagination, filter and sort options for list endpoints.

    Every field defaults to None, and None fields are never sent.
    Each manager only forwards the fields its endpoints understand.

    Attributes:
        page: 1-based page number.
        limit: Page size.
        owner: Owner address filter (NFT endpoints).
        contract_address: Contract address filter (NFT endpoints).
        seller: Seller address filter (marketplace endpoints).
        buyer: Buyer address filter (marketplace endpoints).
        nft_id: NFT identifier filter (marketplace endpoints).
        user: Sender-or-recipient filter (transfer endpoints).
        status: Resource status filter.
        min_price: Lower price bound.
        max_price: Upper price bound.
        currency: Currency code filter.
        created_after: ISO 8601 lower bound on creation time.
        created_before: ISO 8601 upper bound on creation time.
        sort_field: Field to sort by.
        sort_direction: "asc" or "desc".
    """
    page: int | None = None
    limit: int | None = None
    owner: str | None = None
    contract_address: str | None = None
    seller: str | None = None
    buyer: str | None = None
    nft_id: str | None = None
    user: str | None = None
    status: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    currency: str | None = None
    created_after: str | None = None
    created_before: str | None = None
    sort_field: str | None = None
    sort_direction: SortDirection | None = None


# Mapping keys accepted as aliases for QueryOptions fields.
_OPTION_ALIASES = {"field": "sort_field", "direction": "sort_direction"}


def build_query_params(
    options: QueryOptions | Mapping[str, Any] | None,
    allowed: tuple[str, ...],
    **overrides: Any,
) -> dict[str, Any]:
    """
    Collect allow-listed option values into a query-parameter dict.

    Unrecognized keys are dropped silently and None values are omitted.
    Keyword overrides win over ``options`` and must be allow-listed too.
    """
    if options is None:
        source: dict[str, Any] = {}
    elif isinstance(options, QueryOptions):
        source = asdict(options)
    else:
        source = {_OPTION_ALIASES.get(key, key): value for key, value in options.items()}
    source.update(overrides)

    return {key: source[key] for key in allowed if source.get(key) is not None}
