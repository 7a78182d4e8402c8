from __future__ import annotations

from typing import Any, Literal

from pydantic import ConfigDict

from licensechain_nft.models.common import RequestModel, ResponseModel

NFTStatus = Literal["active", "inactive", "burned", "transferred"]


class NFTAttribute(ResponseModel):
    trait_type: str
    value: str | int | float
    display_type: str | None = None
    max_value: float | None = None
    trait_count: int | None = None


class NFTMetadata(ResponseModel):
    name: str
    description: str
    image: str
    external_url: str | None = None
    attributes: list[NFTAttribute] | None = None
    background_color: str | None = None
    animation_url: str | None = None
    youtube_url: str | None = None


class NFT(ResponseModel):
    id: str
    token_id: str
    contract_address: str
    owner: str
    metadata: NFTMetadata
    created_at: str
    updated_at: str
    license_id: str | None = None
    status: NFTStatus


class NFTMetadataInput(NFTMetadata):
    """Metadata sent on create; keys beyond the standard ones are forwarded as given."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    attributes: list[dict[str, Any]] | None = None


class NFTStats(ResponseModel):
    total: int
    active: int
    burned: int
    transferred: int
    total_value: float


class CreateNFTRequest(RequestModel):
    contract_address: str
    token_id: str
    owner: str
    metadata: NFTMetadataInput
    license_id: str | None = None


class UpdateNFTRequest(RequestModel):
    owner: str | None = None
    # partial metadata: only the keys being changed
    metadata: dict[str, Any] | None = None
    license_id: str | None = None
    status: NFTStatus | None = None


class CollectionMetadata(ResponseModel):
    image: str
    external_url: str | None = None
    background_color: str | None = None


class CollectionMetadataInput(CollectionMetadata):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class Collection(ResponseModel):
    id: str
    name: str
    symbol: str
    description: str
    contract_address: str
    owner: str
    total_supply: int
    created_at: str
    updated_at: str
    metadata: CollectionMetadata


class CollectionStats(ResponseModel):
    total: int
    total_supply: int
    total_owners: int
    floor_price: float
    total_volume: float


class CreateCollectionRequest(RequestModel):
    name: str
    symbol: str
    description: str
    contract_address: str
    owner: str
    total_supply: int
    metadata: CollectionMetadataInput
