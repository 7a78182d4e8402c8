from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import httpx

from licensechain_nft.api.executor import ExecutorMetrics, RequestExecutor, SleepFn
from licensechain_nft.config import ClientConfig, build_client_config, load_config
from licensechain_nft.managers.marketplace import MarketplaceManager
from licensechain_nft.managers.nfts import NFTManager


class LicenseChainNFT:
    """
    Entry point holding the client configuration and both resource managers.

    One instance owns one HTTP connection pool; use it as an async context
    manager or call ``aclose()`` when done. Calls may run concurrently on
    the same instance.

    Example:
        >>> async with LicenseChainNFT.create("lc_live_key") as client:
        ...     nft = await client.nfts.get("nft_123")
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        logger: logging.Logger | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: SleepFn | None = None,
    ) -> None:
        self._config = config
        self._executor = RequestExecutor(config, logger=logger, transport=transport, sleep=sleep)
        self._nfts = NFTManager(self._executor)
        self._marketplace = MarketplaceManager(self._executor)

    @classmethod
    def create(cls, api_key: str, base_url: str | None = None, **kwargs: Any) -> "LicenseChainNFT":
        """
        Build a client from explicit settings.

        ``kwargs`` may hold ClientConfig fields (``timeout_s``, ``max_retries``,
        ``retry_initial_delay_s``) and constructor options (``logger``,
        ``transport``, ``sleep``). Raises ConfigError for invalid settings.
        """
        options = {key: kwargs.pop(key) for key in ("logger", "transport", "sleep") if key in kwargs}
        config = build_client_config(api_key=api_key, base_url=base_url, **kwargs)
        return cls(config, **options)

    @classmethod
    def from_config_file(cls, path: Path, **kwargs: Any) -> "LicenseChainNFT":
        app_config = load_config(path)
        return cls(app_config.api, **kwargs)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def nfts(self) -> NFTManager:
        return self._nfts

    @property
    def marketplace(self) -> MarketplaceManager:
        return self._marketplace

    @property
    def metrics(self) -> ExecutorMetrics:
        return self._executor.metrics

    async def aclose(self) -> None:
        await self._executor.aclose()

    async def __aenter__(self) -> "LicenseChainNFT":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
