import pytest

from euiccdrv.derutil import (
    DerError,
    Node,
    bin2bits_str,
    bin2long,
    bits2bin,
    find_alias_tags,
    find_tag,
    iter_nodes,
    long2bin,
    pack,
    unpack_first,
)

ADDRESSES = bytes.fromhex("BF3C17811574657374726F6F74736D64732E67736D612E636F6D9000")


def test_unpack_sample_response():
    outer = find_tag(ADDRESSES, 0xBF3C)
    assert outer is not None
    inner = find_tag(outer.value, 0x81)
    assert inner.value == b"testrootsmds.gsma.com"
    assert find_tag(outer.value, 0x80) is None


def test_pack_empty_two_byte_tag_round_trip():
    data = pack(Node(0xBF3C))
    node = unpack_first(data)
    assert node.tag == 0xBF3C
    assert node.value == b""
    assert node.raw == data


def test_short_form_round_trip():
    data = pack(Node(0x80, b"abc"))
    node = unpack_first(data)
    assert (node.tag, node.value, node.raw) == (0x80, b"abc", data)


@pytest.mark.parametrize("size", [0x7F, 0x80, 200, 300, 70000])
def test_long_form_round_trip(size):
    value = bytes(range(256)) * (size // 256) + bytes(size % 256)
    node = Node(0x5A, value)
    data = pack(node)
    assert node.encoded_length() == len(data)
    parsed = unpack_first(data)
    assert parsed.value == value
    assert parsed.raw == data


@pytest.mark.parametrize("data", [b"", b"\x1f", b"\x80", b"\x80\x05ab", b"\x80\x82\x01"])
def test_unpack_truncated_raises(data):
    with pytest.raises(DerError):
        unpack_first(data)


def test_iter_nodes_in_order_and_stops_at_garbage():
    a, b, c = Node(0x80, b"1"), Node(0x81, b"22"), Node(0xBF20, b"")
    data = pack(a, b, c) + b"\x80\x09"
    assert [(n.tag, n.value) for n in iter_nodes(data)] == [
        (0x80, b"1"),
        (0x81, b"22"),
        (0xBF20, b""),
    ]


def test_pack_many_is_concatenation():
    a, b = Node(0x80, b"x"), Node(0x81, b"yz")
    assert pack(a, b) == pack(a) + pack(b)


def test_find_alias_tags_returns_first_match():
    data = pack(Node(0x80, b"a"), Node(0x82, b"b"), Node(0x81, b"c"))
    found = find_alias_tags(data, [0x81, 0x82])
    assert found.tag == 0x82
    assert found.value == b"b"
    assert find_alias_tags(data, [0x90]) is None


def test_nested_pack_and_children():
    leaf = Node(0x80, b"smdp.example.com")
    outer = Node(0xBF3F, nested=[leaf])
    assert outer.children() == [leaf]
    parsed = unpack_first(pack(outer))
    assert parsed.tag == 0xBF3F
    assert parsed.value == pack(leaf)
    assert [(c.tag, c.value) for c in parsed.children()] == [(0x80, b"smdp.example.com")]


def test_headless_emits_content_only():
    assert pack(Node(0, b"\x01\x02", headless=True)) == b"\x01\x02"
    inner = Node(0x80, b"q")
    assert pack(Node(0, nested=[inner], headless=True)) == pack(inner)


def test_tag_out_of_range():
    with pytest.raises(DerError):
        pack(Node(0x10000, b""))


@pytest.mark.parametrize("value", [0, 1, 127, 128, 255, 256, 0x7FFF, 0x8000, 0x123456, 2**62])
def test_long_round_trip(value):
    assert bin2long(long2bin(value)) == value


@pytest.mark.parametrize("value", [128, 255, 0x8000, 0x80FFFF])
def test_long2bin_adds_sign_byte(value):
    encoded = long2bin(value)
    assert encoded[0] == 0
    assert encoded[1] & 0x80


def test_long2bin_negative_is_eight_bytes():
    assert long2bin(-1) == b"\xff" * 8
    assert bin2long(long2bin(-5)) == -5


def test_long2bin_out_of_range():
    with pytest.raises(DerError):
        long2bin(1 << 63)


def test_bits_round_trip():
    desc = [chr(ord("a") + i) for i in range(12)]
    encoded = bits2bin([1, 3, 9])
    assert encoded[0] == 0
    assert bin2bits_str(encoded, desc) == [desc[1], desc[3], desc[9]]


def test_bits2bin_size_covers_highest_bit():
    for highest in range(0, 24):
        assert len(bits2bin([highest])) >= highest // 8 + 2


def test_bits_beyond_desc_ignored():
    desc = ["zero", "one"]
    assert bin2bits_str(bits2bin([0, 5]), desc) == [desc[0]]


def test_unused_bits_masked():
    desc = [str(i) for i in range(8)]
    assert bin2bits_str(bytes([3, 0xFF]), desc) == desc[:5]


def test_bin2bits_str_errors():
    with pytest.raises(DerError):
        bin2bits_str(b"", ["a"])
    with pytest.raises(DerError):
        bin2bits_str(bytes([9, 0xFF]), ["a"])