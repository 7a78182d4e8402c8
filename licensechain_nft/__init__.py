__version__ = "1.0.0"

from licensechain_nft.client import LicenseChainNFT
from licensechain_nft.config import ClientConfig
from licensechain_nft.errors import (
    AuthenticationError,
    CollectionError,
    ConfigError,
    ErrorKind,
    LicenseChainError,
    MarketplaceError,
    NetworkError,
    NFTError,
    NotFoundError,
    RateLimitError,
    ServerError,
    ValidationError,
)
from licensechain_nft.models.common import QueryOptions

__all__ = [
    "__version__",
    "LicenseChainNFT",
    "ClientConfig",
    "QueryOptions",
    "ErrorKind",
    "LicenseChainError",
    "ConfigError",
    "NetworkError",
    "ValidationError",
    "AuthenticationError",
    "NotFoundError",
    "RateLimitError",
    "ServerError",
    "NFTError",
    "MarketplaceError",
    "CollectionError",
]
