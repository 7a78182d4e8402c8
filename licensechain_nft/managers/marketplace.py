from __future__ import annotations

from typing import Any, Mapping

from licensechain_nft.errors import MarketplaceError
from licensechain_nft.managers.base import ResourceManager
from licensechain_nft.models.common import Page, QueryOptions, build_query_params
from licensechain_nft.models.marketplace import (
    CreateListingRequest,
    Listing,
    MarketplaceStats,
    Sale,
    SaleStats,
    Transfer,
    UpdateListingRequest,
)
from licensechain_nft.validation import require_address, require_id, require_not_empty, require_positive

MARKETPLACE_QUERY_KEYS = (
    "page",
    "limit",
    "seller",
    "buyer",
    "nft_id",
    "user",
    "status",
    "min_price",
    "max_price",
    "currency",
    "created_after",
    "created_before",
    "sort_field",
    "sort_direction",
)

LISTINGS_PATH = "/marketplace/listings"
LISTING_PATH = LISTINGS_PATH + "/{listing_id}"
SALES_PATH = "/marketplace/sales"
TRANSFERS_PATH = "/marketplace/transfers"

Options = QueryOptions | Mapping[str, Any] | None


class MarketplaceManager(ResourceManager):
    """Listings, sales and transfers under ``/marketplace``."""

    response_error = MarketplaceError

    async def create_listing(self, request: CreateListingRequest | Mapping[str, Any]) -> Listing:
        request = self._coerce_request(CreateListingRequest, request)
        require_id(request.nft_id, "nft_id")
        require_address(request.seller, "seller")
        require_positive(request.price, "price")
        require_not_empty(request.currency, "currency")

        payload = await self._execute("POST", LISTINGS_PATH, body=request.to_body())
        return self._unwrap(Listing, payload)

    async def get_listing(self, listing_id: str) -> Listing:
        require_id(listing_id, "listing_id")
        payload = await self._execute("GET", LISTING_PATH, path_params={"listing_id": listing_id})
        return self._unwrap(Listing, payload)

    async def update_listing(self, listing_id: str, updates: UpdateListingRequest | Mapping[str, Any]) -> Listing:
        require_id(listing_id, "listing_id")
        updates = self._coerce_request(UpdateListingRequest, updates)
        if updates.price is not None:
            require_positive(updates.price, "price")
        if updates.currency is not None:
            require_not_empty(updates.currency, "currency")

        payload = await self._execute(
            "PUT", LISTING_PATH, path_params={"listing_id": listing_id}, body=updates.to_body()
        )
        return self._unwrap(Listing, payload)

    async def delete_listing(self, listing_id: str) -> None:
        require_id(listing_id, "listing_id")
        await self._execute("DELETE", LISTING_PATH, path_params={"listing_id": listing_id})

    async def list_listings(self, options: Options = None) -> Page[Listing]:
        return await self._list(LISTINGS_PATH, Listing, options)

    async def list_listings_by_seller(self, seller: str, options: Options = None) -> Page[Listing]:
        require_address(seller, "seller")
        return await self._list(LISTINGS_PATH, Listing, options, seller=seller)

    async def list_listings_by_nft(self, nft_id: str, options: Options = None) -> Page[Listing]:
        require_id(nft_id, "nft_id")
        return await self._list(LISTINGS_PATH, Listing, options, nft_id=nft_id)

    async def buy(self, listing_id: str, buyer: str) -> Sale:
        require_id(listing_id, "listing_id")
        require_address(buyer, "buyer")
        payload = await self._execute(
            "POST", LISTING_PATH + "/buy", path_params={"listing_id": listing_id}, body={"buyer": buyer}
        )
        return self._unwrap(Sale, payload)

    async def cancel_listing(self, listing_id: str) -> None:
        require_id(listing_id, "listing_id")
        await self._execute("POST", LISTING_PATH + "/cancel", path_params={"listing_id": listing_id})

    async def list_sales(self, options: Options = None) -> Page[Sale]:
        return await self._list(SALES_PATH, Sale, options)

    async def list_sales_by_nft(self, nft_id: str, options: Options = None) -> Page[Sale]:
        require_id(nft_id, "nft_id")
        return await self._list(SALES_PATH, Sale, options, nft_id=nft_id)

    async def list_sales_by_buyer(self, buyer: str, options: Options = None) -> Page[Sale]:
        require_address(buyer, "buyer")
        return await self._list(SALES_PATH, Sale, options, buyer=buyer)

    async def list_sales_by_seller(self, seller: str, options: Options = None) -> Page[Sale]:
        require_address(seller, "seller")
        return await self._list(SALES_PATH, Sale, options, seller=seller)

    async def sale_stats(self) -> SaleStats:
        payload = await self._execute("GET", f"{SALES_PATH}/stats")
        return self._unwrap(SaleStats, payload)

    async def list_transfers(self, options: Options = None) -> Page[Transfer]:
        return await self._list(TRANSFERS_PATH, Transfer, options)

    async def list_transfers_by_nft(self, nft_id: str, options: Options = None) -> Page[Transfer]:
        require_id(nft_id, "nft_id")
        return await self._list(TRANSFERS_PATH, Transfer, options, nft_id=nft_id)

    async def list_transfers_by_user(self, user: str, options: Options = None) -> Page[Transfer]:
        require_address(user, "user")
        return await self._list(TRANSFERS_PATH, Transfer, options, user=user)

    async def stats(self) -> MarketplaceStats:
        payload = await self._execute("GET", "/marketplace/stats")
        return self._unwrap(MarketplaceStats, payload)

    async def _list(self, path: str, item_cls: type, options: Options, **filters: Any) -> Page[Any]:
        params = build_query_params(options, MARKETPLACE_QUERY_KEYS, **filters)
        payload = await self._execute("GET", path, params=params)
        return self._parse(Page[item_cls], payload)
