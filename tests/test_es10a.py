import pytest

from euiccdrv.derutil import DerError, Node, find_tag, long2bin, pack
from euiccdrv.es10a import (
    ConfiguredAddresses,
    get_euicc_configured_addresses,
    set_default_dp_address,
)


class FakeCard:
    def __init__(self, response):
        self.response = response
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        return self.response


def test_get_addresses_from_sample_response():
    card = FakeCard(bytes.fromhex("BF3C17811574657374726F6F74736D64732E67736D612E636F6D"))
    result = get_euicc_configured_addresses(card)
    assert result == ConfiguredAddresses(None, "testrootsmds.gsma.com")


def test_get_addresses_request_bytes():
    card = FakeCard(pack(Node(0xBF3C)))
    get_euicc_configured_addresses(card)
    assert card.requests == [b"\xbf\x3c\x00"]


def test_get_addresses_both_present():
    response = pack(
        Node(
            0xBF3C,
            nested=[
                Node(0x80, value=b"smdp.example.com"),
                Node(0x81, value=b"smds.example.com"),
            ],
        )
    )
    result = get_euicc_configured_addresses(FakeCard(response))
    assert result.default_dp_address == "smdp.example.com"
    assert result.root_ds_address == "smds.example.com"


def test_get_addresses_empty_response_has_none():
    result = get_euicc_configured_addresses(FakeCard(pack(Node(0xBF3C))))
    assert result == ConfiguredAddresses()


def test_get_addresses_wrong_tag_raises():
    with pytest.raises(DerError):
        get_euicc_configured_addresses(FakeCard(pack(Node(0xBF3F))))


def test_command_error_propagates():
    def failing(request):
        raise OSError("card gone")

    with pytest.raises(OSError):
        get_euicc_configured_addresses(failing)


def test_set_default_dp_address_request_carries_address():
    response = pack(Node(0xBF3F, nested=[Node(0x80, value=long2bin(0))]))
    card = FakeCard(response)
    assert set_default_dp_address(card, "smdp.example.com") == 0
    request = find_tag(card.requests[0], 0xBF3F)
    assert request is not None
    inner = find_tag(request.value, 0x80)
    assert inner.value == b"smdp.example.com"


def test_set_default_dp_address_returns_result_code():
    response = pack(Node(0xBF3F, nested=[Node(0x80, value=long2bin(1))]))
    assert set_default_dp_address(FakeCard(response), "smdp.example.com") == 1


def test_set_default_dp_address_missing_result_raises():
    with pytest.raises(DerError):
        set_default_dp_address(FakeCard(pack(Node(0xBF3F))), "smdp.example.com")


def test_set_default_dp_address_wrong_response_raises():
    with pytest.raises(DerError):
        set_default_dp_address(FakeCard(b""), "smdp.example.com")