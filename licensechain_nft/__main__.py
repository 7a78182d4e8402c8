from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from licensechain_nft.client import LicenseChainNFT
from licensechain_nft.config import ClientConfig, LoggingConfig, build_client_config, load_config
from licensechain_nft.errors import ConfigError, ErrorKind, LicenseChainError
from licensechain_nft.models.common import QueryOptions
from licensechain_nft.obs.logging import LogSettings, build_logger, log_event
from licensechain_nft.webhooks import verify_webhook_signature

EXIT_OK = 0
EXIT_API_ERROR = 1
EXIT_USAGE_ERROR = 2
EXIT_SIGNATURE_MISMATCH = 3


def _add_list_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--page", type=int)
    parser.add_argument("--limit", type=int)
    parser.add_argument("--status")
    parser.add_argument("--currency")
    parser.add_argument("--min-price", type=float)
    parser.add_argument("--max-price", type=float)
    parser.add_argument("--sort-field")
    parser.add_argument("--sort-direction", choices=["asc", "desc"])


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="LicenseChain NFT API client")
    parser.add_argument("--config", help="Path to config YAML")
    parser.add_argument("--api-key", help="API key (overrides config)")
    parser.add_argument("--base-url", help="API base URL (overrides config)")
    parser.add_argument("--log-level", help="Logging level (overrides config)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    nft_get = subparsers.add_parser("nft-get", help="Fetch one NFT")
    nft_get.add_argument("nft_id")

    nft_list = subparsers.add_parser("nft-list", help="List NFTs")
    nft_list.add_argument("--owner")
    nft_list.add_argument("--contract", dest="contract_address")
    _add_list_options(nft_list)

    subparsers.add_parser("nft-stats", help="NFT statistics")

    collection_get = subparsers.add_parser("collection-get", help="Fetch one collection")
    collection_get.add_argument("collection_id")

    collection_stats = subparsers.add_parser("collection-stats", help="Collection statistics")
    collection_stats.add_argument("collection_id")

    listing_get = subparsers.add_parser("listing-get", help="Fetch one marketplace listing")
    listing_get.add_argument("listing_id")

    listing_list = subparsers.add_parser("listing-list", help="List marketplace listings")
    listing_list.add_argument("--seller")
    listing_list.add_argument("--nft-id")
    _add_list_options(listing_list)

    sales = subparsers.add_parser("sales", help="List sales")
    sales.add_argument("--buyer")
    sales.add_argument("--seller")
    sales.add_argument("--nft-id")
    _add_list_options(sales)

    transfers = subparsers.add_parser("transfers", help="List transfers")
    transfers.add_argument("--user")
    transfers.add_argument("--nft-id")
    _add_list_options(transfers)

    subparsers.add_parser("marketplace-stats", help="Marketplace statistics")

    verify = subparsers.add_parser("verify-webhook", help="Check a webhook signature")
    verify.add_argument("--payload-file", required=True, help="File holding the raw webhook body")
    verify.add_argument("--signature", required=True, help="Hex signature from the webhook header")
    verify.add_argument("--secret", required=True, help="Shared webhook secret")

    return parser.parse_args(argv)


def _query_options(args: argparse.Namespace) -> QueryOptions:
    return QueryOptions(
        page=args.page,
        limit=args.limit,
        owner=getattr(args, "owner", None),
        contract_address=getattr(args, "contract_address", None),
        seller=getattr(args, "seller", None),
        buyer=getattr(args, "buyer", None),
        nft_id=getattr(args, "nft_id", None),
        user=getattr(args, "user", None),
        status=args.status,
        min_price=args.min_price,
        max_price=args.max_price,
        currency=args.currency,
        sort_field=args.sort_field,
        sort_direction=args.sort_direction,
    )


def resolve_settings(args: argparse.Namespace) -> tuple[ClientConfig, LoggingConfig]:
    overrides: dict[str, Any] = {}
    logging_cfg = LoggingConfig()
    if args.config:
        app_config = load_config(Path(args.config))
        overrides = app_config.api.model_dump()
        logging_cfg = app_config.logging
    if args.api_key:
        overrides["api_key"] = args.api_key
    if args.base_url:
        overrides["base_url"] = args.base_url
    if args.log_level:
        logging_cfg = logging_cfg.model_copy(update={"level": args.log_level.upper()})
    if "api_key" not in overrides:
        raise ConfigError("API key is required (--api-key or config file)")
    return build_client_config(**overrides), logging_cfg


async def run_command(client: LicenseChainNFT, args: argparse.Namespace) -> Any:
    command = args.command
    if command == "nft-get":
        return await client.nfts.get(args.nft_id)
    if command == "nft-list":
        return await client.nfts.list(_query_options(args))
    if command == "nft-stats":
        return await client.nfts.stats()
    if command == "collection-get":
        return await client.nfts.get_collection(args.collection_id)
    if command == "collection-stats":
        return await client.nfts.get_collection_stats(args.collection_id)
    if command == "listing-get":
        return await client.marketplace.get_listing(args.listing_id)
    if command == "listing-list":
        return await client.marketplace.list_listings(_query_options(args))
    if command == "sales":
        return await client.marketplace.list_sales(_query_options(args))
    if command == "transfers":
        return await client.marketplace.list_transfers(_query_options(args))
    if command == "marketplace-stats":
        return await client.marketplace.stats()
    raise ValueError(f"Unsupported command: {command}")


def _dump(result: Any) -> str:
    if isinstance(result, BaseModel):
        result = result.model_dump(mode="json", by_alias=True, exclude_none=True)
    return json.dumps(result, ensure_ascii=False, indent=2)


async def _run(config: ClientConfig, args: argparse.Namespace, logger: logging.Logger) -> Any:
    async with LicenseChainNFT(config, logger=logger) as client:
        return await run_command(client, args)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])

    if args.command == "verify-webhook":
        try:
            payload = Path(args.payload_file).read_bytes()
        except OSError as exc:
            print(f"Cannot read payload file: {exc}", file=sys.stderr)
            return EXIT_USAGE_ERROR
        if verify_webhook_signature(payload, args.signature, args.secret):
            print("signature ok")
            return EXIT_OK
        print("signature mismatch")
        return EXIT_SIGNATURE_MISMATCH

    try:
        config, logging_cfg = resolve_settings(args)
    except ConfigError as exc:
        print(exc.message, file=sys.stderr)
        return EXIT_USAGE_ERROR

    logger = build_logger(
        LogSettings(
            level=logging_cfg.level,
            log_file=Path(logging_cfg.log_file) if logging_cfg.log_file else None,
            jsonl=logging_cfg.jsonl,
        )
    )

    try:
        result = asyncio.run(_run(config, args, logger.getChild("cli")))
    except LicenseChainError as exc:
        log_event(logger, logging.ERROR, "command_failed", str(exc), command=args.command, error_code=exc.code)
        print(f"{exc.code}: {exc.message}", file=sys.stderr)
        return EXIT_USAGE_ERROR if exc.kind is ErrorKind.VALIDATION else EXIT_API_ERROR

    print(_dump(result))
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
