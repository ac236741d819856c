"""Minimal DER/BER-TLV packing and unpacking."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field

_LONG_MIN = -(1 << 63)
_LONG_MAX = (1 << 63) - 1


class DerError(ValueError):
    """Raised when TLV data is malformed or cannot be encoded."""


@dataclass
class Node:
    """One TLV node.

    ``nested`` holds child nodes to pack in place of ``value``. A headless
    node packs only its content, without tag and length. ``raw`` is the
    complete encoding of a node that was unpacked from a buffer.
    """

    tag: int
    value: bytes = b""
    nested: list[Node] = field(default_factory=list)
    headless: bool = False
    raw: bytes = field(default=b"", repr=False, compare=False)

    def _content(self) -> bytes:
        if self.nested:
            return b"".join(child._encode() for child in self.nested)
        return bytes(self.value)

    def _encode(self) -> bytes:
        body = self._content()
        if self.headless:
            return body
        return _tag_bytes(self.tag) + _length_bytes(len(body)) + body

    def encoded_length(self) -> int:
        """Return the size of this node once packed."""
        return len(self._encode())

    def children(self) -> list[Node]:
        """Return the nested nodes, parsing ``value`` if none were given."""
        if self.nested:
            return list(self.nested)
        return list(iter_nodes(self.value))


def _tag_bytes(tag: int) -> bytes:
    if not 0 <= tag <= 0xFFFF:
        raise DerError(f"tag out of range: {tag:#x}")
    return tag.to_bytes(2 if tag >> 8 else 1, "big")


def _length_bytes(length: int) -> bytes:
    if length < 0x80:
        return bytes([length])
    size = (length.bit_length() + 7) // 8
    return bytes([0x80 | size]) + length.to_bytes(size, "big")


def _unpack_at(data: bytes, offset: int) -> Node:
    end = len(data)
    if offset >= end:
        raise DerError("no tag")
    pos = offset
    tag = data[pos]
    pos += 1
    if tag & 0x1F == 0x1F:
        if pos >= end:
            raise DerError("truncated tag")
        tag = (tag << 8) | data[pos]
        pos += 1
    if pos >= end:
        raise DerError("missing length")
    length = data[pos]
    pos += 1
    if length & 0x80:
        size = length & 0x7F
        if end - pos < size:
            raise DerError("truncated length")
        length = int.from_bytes(data[pos : pos + size], "big") & 0xFFFFFFFF
        pos += size
    if end - pos < length:
        raise DerError("truncated value")
    return Node(tag=tag, value=data[pos : pos + length], raw=data[offset : pos + length])


def unpack_first(buffer: bytes) -> Node:
    """Parse the first TLV node at the start of ``buffer``."""
    return _unpack_at(bytes(buffer), 0)


def iter_nodes(buffer: bytes) -> Iterator[Node]:
    """Yield consecutive nodes, stopping at the end or at malformed data."""
    data = bytes(buffer)
    offset = 0
    while True:
        try:
            node = _unpack_at(data, offset)
        except DerError:
            return
        yield node
        offset += len(node.raw)


def find_alias_tags(buffer: bytes, tags: Iterable[int]) -> Node | None:
    """Return the first node whose tag is one of ``tags``, or None."""
    wanted = set(tags)
    return next((node for node in iter_nodes(buffer) if node.tag in wanted), None)


def find_tag(buffer: bytes, tag: int) -> Node | None:
    """Return the first node carrying ``tag``, or None."""
    return find_alias_tags(buffer, (tag,))


def pack(*args: Node) -> bytes:
    """Pack the given sibling nodes, children included, into bytes."""
    return b"".join(node._encode() for node in args)


def bin2long(data: bytes) -> int:
    """Read big-endian bytes as a 64-bit signed integer."""
    data = bytes(data)
    if len(data) >= 8:
        return int.from_bytes(data[-8:], "big", signed=True)
    return int.from_bytes(data, "big")


def long2bin(value: int) -> bytes:
    """Encode a 64-bit signed integer as a minimal DER INTEGER body.

    Positive values whose top bit would read as a sign gain a leading zero
    byte; negative values always take eight bytes.
    """
    if not _LONG_MIN <= value <= _LONG_MAX:
        raise DerError(f"value out of range: {value}")
    size = 1
    for shift in range(1, 8):
        if value >> (shift * 8):
            size += 1
            continue
        if value > 0 and (value >> ((shift - 1) * 8)) & 0x80:
            size += 1
        break
    return (value & ((1 << (8 * size)) - 1)).to_bytes(size, "big")


def bits2bin(bits: Iterable[int]) -> bytes:
    """Encode bit positions as a BIT STRING body with no unused bits."""
    positions = list(bits)
    if any(bit < 0 for bit in positions):
        raise DerError("bit positions must not be negative")
    highest = max(positions, default=0)
    out = bytearray((highest + 8) // 8 + 1)
    for bit in positions:
        out[bit // 8 + 1] |= 0x80 >> (bit % 8)
    return bytes(out)


def bin2bits_str(data: bytes, desc: Sequence[str]) -> list[str]:
    """Return the names in ``desc`` of the bits set in a BIT STRING body."""
    data = bytes(data)
    if not data:
        raise DerError("empty bit string")
    unused, flags = data[0], data[1:]
    if unused > 8:
        raise DerError(f"invalid unused bit count: {unused}")
    names = []
    for byte_index, byte in enumerate(flags):
        if byte_index == len(flags) - 1:
            byte &= ~(0xFF >> (8 - unused)) & 0xFF
        for bit in range(8):
            index = byte_index * 8 + bit
            if index >= len(desc):
                break
            if byte & (0x80 >> bit):
                names.append(desc[index])
    return names