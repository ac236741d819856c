"""ES10a commands: configured SM-DP+ and SM-DS addresses."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from euiccdrv.derutil import DerError, Node, bin2long, find_tag, pack

Command = Callable[[bytes], bytes]

_TAG_CONFIGURED_ADDRESSES = 0xBF3C
_TAG_SET_DEFAULT_DP_ADDRESS = 0xBF3F
_TAG_DEFAULT_DP_ADDRESS = 0x80
_TAG_ROOT_DS_ADDRESS = 0x81
_TAG_RESULT = 0x80


@dataclass(frozen=True)
class ConfiguredAddresses:
    """Addresses configured on the eUICC; either may be absent."""

    default_dp_address: str | None = None
    root_ds_address: str | None = None


def _text(node: Node | None) -> str | None:
    if node is None:
        return None
    return node.value.decode("utf-8", errors="replace")


def _response_body(command: Command, request: Node) -> bytes:
    response = find_tag(command(pack(request)), request.tag)
    if response is None:
        raise DerError(f"response carries no {request.tag:#06x} node")
    return response.value


def get_euicc_configured_addresses(command: Command) -> ConfiguredAddresses:
    """Query the default SM-DP+ address and the root SM-DS address.

    ``command`` sends an ES10 request and returns the response data.
    """
    body = _response_body(command, Node(tag=_TAG_CONFIGURED_ADDRESSES))
    return ConfiguredAddresses(
        default_dp_address=_text(find_tag(body, _TAG_DEFAULT_DP_ADDRESS)),
        root_ds_address=_text(find_tag(body, _TAG_ROOT_DS_ADDRESS)),
    )


def set_default_dp_address(command: Command, smdp: str) -> int:
    """Set the default SM-DP+ address and return the card's result code."""
    request = Node(
        tag=_TAG_SET_DEFAULT_DP_ADDRESS,
        nested=[Node(tag=_TAG_DEFAULT_DP_ADDRESS, value=smdp.encode("utf-8"))],
    )
    body = _response_body(command, request)
    result = find_tag(body, _TAG_RESULT)
    if result is None:
        raise DerError("response carries no result code")
    return bin2long(result.value)