from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from licensechain_nft.models.common import RequestModel, ResponseModel

ListingStatus = Literal["active", "sold", "cancelled"]


class Listing(ResponseModel):
    id: str
    nft_id: str
    seller: str
    price: float
    currency: str
    status: ListingStatus
    created_at: str
    updated_at: str
    expires_at: str | None = None


class CreateListingRequest(RequestModel):
    nft_id: str
    seller: str
    price: float
    currency: str
    expires_at: str | None = None


class UpdateListingRequest(RequestModel):
    price: float | None = None
    currency: str | None = None
    status: ListingStatus | None = None
    expires_at: str | None = None


class MarketplaceStats(ResponseModel):
    total_listings: int
    active_listings: int
    sold_listings: int
    total_volume: float
    average_price: float


class Sale(ResponseModel):
    id: str
    nft_id: str
    seller: str
    buyer: str
    price: float
    currency: str
    transaction_hash: str
    created_at: str


class SaleStats(ResponseModel):
    total_sales: int
    total_volume: float
    average_price: float
    unique_buyers: int
    unique_sellers: int


class Transfer(ResponseModel):
    id: str
    nft_id: str
    from_address: str = Field(alias="from")
    to: str
    transaction_hash: str
    created_at: str


class WebhookEvent(ResponseModel):
    id: str
    type: str
    data: Any = None
    timestamp: str
    signature: str
