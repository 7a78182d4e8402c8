import pytest

from licensechain_nft.errors import ValidationError
from licensechain_nft.utils import format_price, generate_token_id, parse_price
from licensechain_nft.validation import is_token_id


def test_generate_token_id_is_valid() -> None:
    for _ in range(20):
        token_id = generate_token_id()
        assert is_token_id(token_id)
        assert int(token_id) < 1_000_000_000


def test_format_price() -> None:
    assert format_price(1.5, "ETH") == "1.5000 ETH"
    assert format_price(0.123456, "USDC") == "0.1235 USDC"


def test_parse_price() -> None:
    assert parse_price("1.5 ETH") == (1.5, "ETH")
    assert parse_price("2 MATIC") == (2.0, "MATIC")
    assert parse_price("3.25") == (3.25, "ETH")


@pytest.mark.parametrize("text", ["", "abc ETH", "1 2 3", "nan ETH", "inf"])
def test_parse_price_rejects(text: str) -> None:
    with pytest.raises(ValidationError):
        parse_price(text)
