"""APDU driver that exchanges JSON lines over standard input and output."""

from __future__ import annotations

import binascii
import json
import sys
from typing import TextIO

from euiccdrv.interface import ApduDriver, DriverError

_TYPE = "apdu"


def _read_line(stream: TextIO) -> str:
    line = stream.readline()
    return line.partition("\n")[0].partition("\r")[0]


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class StdioApduDriver(ApduDriver):
    """Forwards every APDU operation to a peer as one JSON line each way.

    Requests look like ``{"type":"apdu","payload":{"func":...,"param":...}}``
    and replies like ``{"type":"apdu","payload":{"ecode":0,"data":"..."}}``.
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

    def _request(self, func: str, param: bytes | None) -> None:
        payload = {"func": func, "param": bytes(param).hex() if param else None}
        line = json.dumps({"type": _TYPE, "payload": payload}, separators=(",", ":"))
        try:
            self._out.write(line + "\r\n")
            self._out.flush()
        except OSError as exc:
            raise DriverError(f"cannot write request: {exc}") from exc

    def _response(self) -> tuple[int, bytes | None]:
        try:
            root = json.loads(_read_line(self._in))
        except ValueError as exc:
            raise DriverError("malformed response") from exc
        if not isinstance(root, dict) or root.get("type") != _TYPE:
            raise DriverError("response is not of type apdu")
        payload = root.get("payload")
        if not isinstance(payload, dict):
            raise DriverError("response has no payload object")
        ecode = payload.get("ecode")
        if not _is_number(ecode):
            raise DriverError("response has no numeric ecode")
        data = payload.get("data")
        if not isinstance(data, str):
            return int(ecode), None
        try:
            return int(ecode), binascii.unhexlify(data.encode("ascii"))
        except ValueError as exc:
            raise DriverError("response data is not hex") from exc

    def _call(self, func: str, param: bytes | None = None) -> tuple[int, bytes | None]:
        self._request(func, param)
        return self._response()

    def connect(self) -> None:
        ecode, _ = self._call("connect")
        if ecode < 0:
            raise DriverError(f"connect failed: {ecode}")

    def disconnect(self) -> None:
        try:
            self._call("disconnect")
        except DriverError:
            pass

    def logic_channel_open(self, aid: bytes) -> int:
        ecode, _ = self._call("logic_channel_open", bytes(aid))
        if ecode < 0:
            raise DriverError(f"logic channel open failed: {ecode}")
        return ecode

    def logic_channel_close(self, channel: int) -> None:
        try:
            self._call("logic_channel_close", bytes([channel & 0xFF]))
        except DriverError:
            pass

    def transmit(self, tx: bytes) -> bytes:
        ecode, data = self._call("transmit", bytes(tx))
        if ecode < 0:
            raise DriverError(f"transmit failed: {ecode}")
        return data if data is not None else b""