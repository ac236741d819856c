"""Base64 encoding and lenient decoding."""

from __future__ import annotations

import binascii

_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_SEXTETS = {ord(char): index for index, char in enumerate(_ALPHABET)}


def _valid_prefix(text: str | bytes) -> bytes:
    """Return the leading run of characters that belong to the alphabet."""
    raw = text.encode("latin-1") if isinstance(text, str) else bytes(text)
    for position, byte in enumerate(raw):
        if byte not in _SEXTETS:
            return raw[:position]
    return raw


def encode(data: bytes) -> str:
    """Encode bytes as padded standard base64 text."""
    return binascii.b2a_base64(bytes(data), newline=False).decode("ascii")


def decode(text: str | bytes) -> bytes:
    """Decode base64 text.

    Decoding stops at the first character outside the alphabet, so padding
    and any trailing data are ignored. A single dangling character at the
    end carries too few bits for a byte and is dropped.
    """
    symbols = _valid_prefix(text)
    out = bytearray()
    for start in range(0, len(symbols), 4):
        chunk = symbols[start : start + 4]
        if len(chunk) < 2:
            break
        value = 0
        for symbol in chunk:
            value = (value << 6) | _SEXTETS[symbol]
        produced = len(chunk) - 1
        value >>= 6 * len(chunk) - 8 * produced
        out += value.to_bytes(produced, "big")
    return bytes(out)


def encoded_length(length: int) -> int:
    """Return the length of the base64 text for ``length`` input bytes."""
    if length < 0:
        raise ValueError("length must not be negative")
    return (length + 2) // 3 * 4


def decoded_length(text: str | bytes) -> int:
    """Return an upper bound on the number of bytes ``text`` decodes to."""
    return (len(_valid_prefix(text)) + 3) // 4 * 3