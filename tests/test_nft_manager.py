import json

import httpx
import pytest

from licensechain_nft.client import LicenseChainNFT
from licensechain_nft.errors import CollectionError, ErrorKind, NFTError, NotFoundError, ValidationError
from licensechain_nft.models.common import QueryOptions
from licensechain_nft.models.nft import CreateNFTRequest, NFTMetadataInput

CONTRACT = "0x1234567890123456789012345678901234567890"
OWNER = "0xabcdefabcdefabcdefabcdefabcdefabcdefabcd"


class RecordingHandler:
    def __init__(self, *responses: httpx.Response) -> None:
        self._responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responses.pop(0)


def build_client(handler: RecordingHandler) -> LicenseChainNFT:
    return LicenseChainNFT.create(
        "test-key",
        "https://api.example.test",
        max_retries=1,
        transport=httpx.MockTransport(handler),
    )


def nft_payload(**overrides) -> dict:
    payload = {
        "id": "nft_1",
        "token_id": "42",
        "contract_address": CONTRACT,
        "owner": OWNER,
        "metadata": {"name": "N", "description": "D", "image": "http://x/i.png"},
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-01-01T00:00:00Z",
        "status": "active",
    }
    payload.update(overrides)
    return payload


def collection_request(**overrides) -> dict:
    request = {
        "name": "Genesis",
        "symbol": "GEN",
        "description": "First drop",
        "contract_address": CONTRACT,
        "owner": OWNER,
        "total_supply": 10000,
        "metadata": {"image": "http://x/c.png"},
    }
    request.update(overrides)
    return request


@pytest.mark.asyncio
async def test_create_nft_end_to_end() -> None:
    handler = RecordingHandler(httpx.Response(201, json={"data": nft_payload()}))
    client = build_client(handler)

    nft = await client.nfts.create(
        CreateNFTRequest(
            contract_address=CONTRACT,
            token_id="42",
            owner=OWNER,
            metadata=NFTMetadataInput(name="N", description="D", image="http://x/i.png"),
        )
    )

    assert nft.status == "active"
    assert nft.token_id == "42"
    request = handler.requests[0]
    assert request.method == "POST"
    assert request.url.path == "/nfts"
    assert json.loads(request.content) == {
        "contract_address": CONTRACT,
        "token_id": "42",
        "owner": OWNER,
        "metadata": {"name": "N", "description": "D", "image": "http://x/i.png"},
    }


@pytest.mark.asyncio
async def test_create_nft_with_bad_token_id_makes_no_call() -> None:
    handler = RecordingHandler()
    client = build_client(handler)

    with pytest.raises(ValidationError) as exc_info:
        await client.nfts.create(
            {
                "contract_address": CONTRACT,
                "token_id": "abc",
                "owner": OWNER,
                "metadata": {"name": "N", "description": "D", "image": "http://x/i.png"},
            }
        )

    assert exc_info.value.kind is ErrorKind.VALIDATION
    assert "token_id" in exc_info.value.message
    assert handler.requests == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "request_body",
    [
        {"contract_address": "0x123", "token_id": "1", "owner": OWNER},
        {"contract_address": CONTRACT, "token_id": "1", "owner": "abcdef"},
        {"contract_address": CONTRACT, "token_id": "1", "owner": OWNER, "metadata": {"name": "", "description": "D", "image": "i"}},
        {"contract_address": CONTRACT, "token_id": "1", "owner": OWNER, "metadata": {"name": "N", "description": "D"}},
    ],
)
async def test_create_nft_rejects_invalid_input(request_body: dict) -> None:
    request_body.setdefault("metadata", {"name": "N", "description": "D", "image": "i"})
    handler = RecordingHandler()
    client = build_client(handler)

    with pytest.raises(ValidationError):
        await client.nfts.create(request_body)

    assert handler.requests == []


@pytest.mark.asyncio
@pytest.mark.parametrize("total_supply", [0, -1])
async def test_create_collection_rejects_non_positive_supply(total_supply: int) -> None:
    handler = RecordingHandler()
    client = build_client(handler)

    with pytest.raises(ValidationError) as exc_info:
        await client.nfts.create_collection(collection_request(total_supply=total_supply))

    assert exc_info.value.message == "total_supply must be positive"
    assert handler.requests == []


@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["name", "symbol", "description"])
async def test_create_collection_rejects_blank_text(field: str) -> None:
    handler = RecordingHandler()
    client = build_client(handler)

    with pytest.raises(ValidationError):
        await client.nfts.create_collection(collection_request(**{field: "   "}))

    assert handler.requests == []


@pytest.mark.asyncio
async def test_create_collection_posts_body() -> None:
    collection = {
        **collection_request(),
        "id": "col_1",
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-01-01T00:00:00Z",
    }
    handler = RecordingHandler(httpx.Response(201, json={"data": collection}))
    client = build_client(handler)

    result = await client.nfts.create_collection(collection_request())

    assert result.id == "col_1"
    assert result.metadata.image == "http://x/c.png"
    assert handler.requests[0].url.path == "/collections"


@pytest.mark.asyncio
async def test_list_builds_allow_listed_query() -> None:
    handler = RecordingHandler(
        httpx.Response(200, json={"data": [nft_payload()], "total": 1, "page": 1, "limit": 10})
    )
    client = build_client(handler)

    page = await client.nfts.list(
        {"page": 1, "limit": None, "owner": OWNER, "bogus": "x", "field": "created_at", "direction": "desc"}
    )

    assert page.total == 1
    assert page.data[0].id == "nft_1"
    params = handler.requests[0].url.params
    assert dict(params) == {
        "page": "1",
        "owner": OWNER,
        "sort_field": "created_at",
        "sort_direction": "desc",
    }


@pytest.mark.asyncio
async def test_list_by_owner_merges_options() -> None:
    handler = RecordingHandler(httpx.Response(200, json={"data": [], "total": 0, "page": 2, "limit": 5}))
    client = build_client(handler)

    await client.nfts.list_by_owner(OWNER, QueryOptions(page=2, limit=5, seller=OWNER))

    assert dict(handler.requests[0].url.params) == {"page": "2", "limit": "5", "owner": OWNER}


@pytest.mark.asyncio
async def test_list_by_contract_validates_address() -> None:
    handler = RecordingHandler()
    client = build_client(handler)

    with pytest.raises(ValidationError) as exc_info:
        await client.nfts.list_by_contract("0xnothex")

    assert exc_info.value.message == "Invalid contract_address format"
    assert handler.requests == []


@pytest.mark.asyncio
async def test_get_requires_id() -> None:
    handler = RecordingHandler()
    client = build_client(handler)

    with pytest.raises(ValidationError):
        await client.nfts.get("  ")

    assert handler.requests == []


@pytest.mark.asyncio
async def test_get_without_envelope_is_nft_error() -> None:
    handler = RecordingHandler(httpx.Response(200, json=nft_payload()))
    client = build_client(handler)

    with pytest.raises(NFTError) as exc_info:
        await client.nfts.get("nft_1")

    assert exc_info.value.kind is ErrorKind.NFT


@pytest.mark.asyncio
async def test_update_sends_only_set_fields() -> None:
    handler = RecordingHandler(httpx.Response(200, json={"data": nft_payload(status="burned")}))
    client = build_client(handler)

    nft = await client.nfts.update("nft_1", {"status": "burned"})

    assert nft.status == "burned"
    request = handler.requests[0]
    assert request.method == "PUT"
    assert json.loads(request.content) == {"status": "burned"}


@pytest.mark.asyncio
async def test_update_rejects_bad_owner() -> None:
    handler = RecordingHandler()
    client = build_client(handler)

    with pytest.raises(ValidationError):
        await client.nfts.update("nft_1", {"owner": "0x12"})

    assert handler.requests == []


@pytest.mark.asyncio
async def test_delete_returns_none() -> None:
    handler = RecordingHandler(httpx.Response(204))
    client = build_client(handler)

    assert await client.nfts.delete("nft_1") is None
    assert handler.requests[0].method == "DELETE"
    assert handler.requests[0].url.path == "/nfts/nft_1"


@pytest.mark.asyncio
async def test_stats_unwrapped() -> None:
    stats = {"total": 10, "active": 7, "burned": 1, "transferred": 2, "total_value": 12.5}
    handler = RecordingHandler(httpx.Response(200, json={"data": stats}))
    client = build_client(handler)

    result = await client.nfts.stats()

    assert result.active == 7
    assert result.total_value == 12.5
    assert handler.requests[0].url.path == "/nfts/stats"


@pytest.mark.asyncio
async def test_collection_not_found() -> None:
    handler = RecordingHandler(httpx.Response(404, json={"error": "collection missing"}))
    client = build_client(handler)

    with pytest.raises(NotFoundError) as exc_info:
        await client.nfts.get_collection("col_404")

    assert exc_info.value.message == "Not Found: collection missing"


@pytest.mark.asyncio
async def test_collection_stats_bad_payload_is_collection_error() -> None:
    handler = RecordingHandler(httpx.Response(200, json={"data": {"total": "many"}}))
    client = build_client(handler)

    with pytest.raises(CollectionError):
        await client.nfts.get_collection_stats("col_1")

    assert handler.requests[0].url.path == "/collections/col_1/stats"


@pytest.mark.asyncio
async def test_list_collections_only_paginates() -> None:
    handler = RecordingHandler(httpx.Response(200, json={"data": [], "total": 0, "page": 1, "limit": 20}))
    client = build_client(handler)

    await client.nfts.list_collections({"page": 1, "limit": 20, "owner": OWNER})

    assert dict(handler.requests[0].url.params) == {"page": "1", "limit": "20"}


@pytest.mark.asyncio
async def test_create_forwards_custom_metadata_keys() -> None:
    handler = RecordingHandler(httpx.Response(201, json={"data": nft_payload()}))
    client = build_client(handler)
    metadata = {
        "name": "N",
        "description": "D",
        "image": "http://x/i.png",
        "edition": 3,
        "attributes": [{"trait_type": "Power", "value": 95, "rarity": "legendary"}],
    }

    await client.nfts.create({"contract_address": CONTRACT, "token_id": "42", "owner": OWNER, "metadata": metadata})

    assert json.loads(handler.requests[0].content)["metadata"] == metadata


@pytest.mark.asyncio
async def test_create_collection_forwards_custom_metadata_keys() -> None:
    collection = {**collection_request(), "id": "col_1", "created_at": "t", "updated_at": "t"}
    handler = RecordingHandler(httpx.Response(201, json={"data": collection}))
    client = build_client(handler)

    await client.nfts.create_collection(collection_request(metadata={"image": "http://x/c.png", "banner": "b.png"}))

    assert json.loads(handler.requests[0].content)["metadata"] == {"image": "http://x/c.png", "banner": "b.png"}


@pytest.mark.asyncio
async def test_ids_are_encoded_as_one_path_segment() -> None:
    handler = RecordingHandler(httpx.Response(204), httpx.Response(404, json={"error": "missing"}))
    client = build_client(handler)

    await client.nfts.delete("1?force=true")
    with pytest.raises(NotFoundError):
        await client.nfts.get_collection_stats("../nfts/7")

    assert handler.requests[0].url.raw_path == b"/nfts/1%3Fforce%3Dtrue"
    assert handler.requests[0].url.query == b""
    assert handler.requests[1].url.raw_path == b"/collections/..%2Fnfts%2F7/stats"


@pytest.mark.asyncio
async def test_metrics_group_calls_by_route() -> None:
    handler = RecordingHandler(*[httpx.Response(204) for _ in range(5)])
    client = build_client(handler)

    for index in range(5):
        await client.nfts.delete(f"nft_{index}")

    assert dict(client.metrics.http_requests_total) == {("/nfts/{nft_id}", "204"): 5}
