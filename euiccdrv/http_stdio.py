"""HTTP driver that exchanges JSON lines over standard input and output."""

from __future__ import annotations

import binascii
import json
import sys
from collections.abc import Sequence
from typing import TextIO

from euiccdrv.interface import DriverError, HttpDriver

_TYPE = "http"


def _read_line(stream: TextIO) -> str:
    line = stream.readline()
    return line.partition("\n")[0].partition("\r")[0]


class StdioHttpDriver(HttpDriver):
    """Hands each HTTP request to a peer as one JSON line and reads its reply.

    Requests look like
    ``{"type":"http","payload":{"url":...,"tx":"...","headers":[...]}}``
    and replies like ``{"type":"http","payload":{"rcode":200,"rx":"..."}}``.
    """

    name = "stdio"

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self._stdin = stdin
        self._stdout = stdout

    @property
    def _in(self) -> TextIO:
        return self._stdin if self._stdin is not None else sys.stdin

    @property
    def _out(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    def _request(self, url: str, tx: bytes | None, headers: Sequence[str]) -> None:
        payload = {
            "url": url,
            "tx": bytes(tx or b"").hex(),
            "headers": list(headers),
        }
        line = json.dumps({"type": _TYPE, "payload": payload}, separators=(",", ":"))
        try:
            self._out.write(line + "\r\n")
            self._out.flush()
        except OSError as exc:
            raise DriverError(f"cannot write request: {exc}") from exc

    def transmit(self, url: str, tx: bytes | None, headers: Sequence[str]) -> tuple[int, bytes]:
        self._request(url, tx, headers)
        try:
            root = json.loads(_read_line(self._in))
        except ValueError as exc:
            raise DriverError("malformed response") from exc
        if not isinstance(root, dict) or root.get("type") != _TYPE:
            raise DriverError("response is not of type http")
        payload = root.get("payload")
        if not isinstance(payload, dict):
            raise DriverError("response has no payload object")
        rcode = payload.get("rcode")
        if not isinstance(rcode, (int, float)) or isinstance(rcode, bool):
            raise DriverError("response has no numeric rcode")
        rx = payload.get("rx")
        if not isinstance(rx, str):
            raise DriverError("response has no rx string")
        try:
            body = binascii.unhexlify(rx.encode("ascii"))
        except ValueError as exc:
            raise DriverError("response rx is not hex") from exc
        return int(rcode), body