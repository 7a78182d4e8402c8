from licensechain_nft.models.common import Page, QueryOptions
from licensechain_nft.models.marketplace import (
    CreateListingRequest,
    Listing,
    MarketplaceStats,
    Sale,
    SaleStats,
    Transfer,
    UpdateListingRequest,
    WebhookEvent,
)
from licensechain_nft.models.nft import (
    NFT,
    Collection,
    CollectionMetadata,
    CollectionMetadataInput,
    CollectionStats,
    CreateCollectionRequest,
    CreateNFTRequest,
    NFTAttribute,
    NFTMetadata,
    NFTMetadataInput,
    NFTStats,
    UpdateNFTRequest,
)

__all__ = [
    "Page",
    "QueryOptions",
    "NFT",
    "NFTAttribute",
    "NFTMetadata",
    "NFTMetadataInput",
    "NFTStats",
    "CreateNFTRequest",
    "UpdateNFTRequest",
    "Collection",
    "CollectionMetadata",
    "CollectionMetadataInput",
    "CollectionStats",
    "CreateCollectionRequest",
    "Listing",
    "CreateListingRequest",
    "UpdateListingRequest",
    "MarketplaceStats",
    "Sale",
    "SaleStats",
    "Transfer",
    "WebhookEvent",
]
