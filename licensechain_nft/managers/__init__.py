from licensechain_nft.managers.marketplace import MarketplaceManager
from licensechain_nft.managers.nfts import NFTManager

__all__ = ["MarketplaceManager", "NFTManager"]
