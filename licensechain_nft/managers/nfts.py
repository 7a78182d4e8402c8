from __future__ import annotations

from typing import Any, Mapping

from licensechain_nft.errors import CollectionError, NFTError
from licensechain_nft.managers.base import ResourceManager
from licensechain_nft.models.common import Page, QueryOptions, build_query_params
from licensechain_nft.models.nft import (
    NFT,
    Collection,
    CollectionStats,
    CreateCollectionRequest,
    CreateNFTRequest,
    NFTStats,
    UpdateNFTRequest,
)
from licensechain_nft.validation import (
    require_address,
    require_id,
    require_metadata,
    require_not_empty,
    require_positive,
    require_token_id,
)

NFT_QUERY_KEYS = (
    "page",
    "limit",
    "owner",
    "contract_address",
    "status",
    "min_price",
    "max_price",
    "currency",
    "created_after",
    "created_before",
    "sort_field",
    "sort_direction",
)

Options = QueryOptions | Mapping[str, Any] | None


class NFTManager(ResourceManager):
    """NFT and collection operations under ``/nfts`` and ``/collections``."""

    response_error = NFTError

    async def create(self, request: CreateNFTRequest | Mapping[str, Any]) -> NFT:
        request = self._coerce_request(CreateNFTRequest, request)
        require_address(request.contract_address, "contract_address")
        require_token_id(request.token_id, "token_id")
        require_address(request.owner, "owner")
        require_metadata(request.metadata.model_dump(), "metadata")

        payload = await self._execute("POST", "/nfts", body=request.to_body())
        return self._unwrap(NFT, payload)

    async def get(self, nft_id: str) -> NFT:
        require_id(nft_id, "nft_id")
        payload = await self._execute("GET", "/nfts/{nft_id}", path_params={"nft_id": nft_id})
        return self._unwrap(NFT, payload)

    async def update(self, nft_id: str, updates: UpdateNFTRequest | Mapping[str, Any]) -> NFT:
        require_id(nft_id, "nft_id")
        updates = self._coerce_request(UpdateNFTRequest, updates)
        if updates.owner is not None:
            require_address(updates.owner, "owner")

        payload = await self._execute(
            "PUT", "/nfts/{nft_id}", path_params={"nft_id": nft_id}, body=updates.to_body()
        )
        return self._unwrap(NFT, payload)

    async def delete(self, nft_id: str) -> None:
        require_id(nft_id, "nft_id")
        await self._execute("DELETE", "/nfts/{nft_id}", path_params={"nft_id": nft_id})

    async def list(self, options: Options = None) -> Page[NFT]:
        params = build_query_params(options, NFT_QUERY_KEYS)
        payload = await self._execute("GET", "/nfts", params=params)
        return self._parse(Page[NFT], payload)

    async def list_by_owner(self, owner: str, options: Options = None) -> Page[NFT]:
        require_address(owner, "owner")
        params = build_query_params(options, NFT_QUERY_KEYS, owner=owner)
        payload = await self._execute("GET", "/nfts", params=params)
        return self._parse(Page[NFT], payload)

    async def list_by_contract(self, contract_address: str, options: Options = None) -> Page[NFT]:
        require_address(contract_address, "contract_address")
        params = build_query_params(options, NFT_QUERY_KEYS, contract_address=contract_address)
        payload = await self._execute("GET", "/nfts", params=params)
        return self._parse(Page[NFT], payload)

    async def stats(self) -> NFTStats:
        payload = await self._execute("GET", "/nfts/stats")
        return self._unwrap(NFTStats, payload)

    async def create_collection(self, request: CreateCollectionRequest | Mapping[str, Any]) -> Collection:
        request = self._coerce_request(CreateCollectionRequest, request)
        require_not_empty(request.name, "name")
        require_not_empty(request.symbol, "symbol")
        require_not_empty(request.description, "description")
        require_address(request.contract_address, "contract_address")
        require_address(request.owner, "owner")
        require_positive(request.total_supply, "total_supply")
        require_not_empty(request.metadata.image, "metadata.image")

        payload = await self._execute("POST", "/collections", body=request.to_body())
        return self._unwrap(Collection, payload, error=CollectionError)

    async def get_collection(self, collection_id: str) -> Collection:
        require_id(collection_id, "collection_id")
        payload = await self._execute(
            "GET", "/collections/{collection_id}", path_params={"collection_id": collection_id}
        )
        return self._unwrap(Collection, payload, error=CollectionError)

    async def list_collections(self, options: Options = None) -> Page[Collection]:
        params = build_query_params(options, ("page", "limit"))
        payload = await self._execute("GET", "/collections", params=params)
        return self._parse(Page[Collection], payload, error=CollectionError)

    async def get_collection_stats(self, collection_id: str) -> CollectionStats:
        require_id(collection_id, "collection_id")
        payload = await self._execute(
            "GET", "/collections/{collection_id}/stats", path_params={"collection_id": collection_id}
        )
        return self._unwrap(CollectionStats, payload, error=CollectionError)
