"""APDU driver that talks to a modem through AT commands on a serial device."""

from __future__ import annotations

import os
import re
import sys
from typing import TextIO

from euiccdrv.interface import ApduDriver, DriverError

DEFAULT_DEVICE = "/dev/ttyUSB0"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _strip_line(raw: str) -> str:
    return re.split(r"[\r\n]", raw, maxsplit=1)[0]


class AtApduDriver(ApduDriver):
    """Sends APDUs through the AT+CCHO, AT+CCHC and AT+CGLA commands.

    The device path comes from ``device``, else from the ``AT_DEVICE``
    environment variable, else defaults to ``/dev/ttyUSB0``. A ready-made
    text ``stream`` may be given instead of a path. Setting ``AT_DEBUG``
    echoes every line read from the modem to standard output.
    """

    name = "at"

    def __init__(self, device: str | None = None, stream: TextIO | None = None) -> None:
        self._device = device
        self._given_stream = stream
        self._stream: TextIO | None = None
        self._channel = 0

    def _send(self, command: str) -> None:
        if self._stream is None:
            raise DriverError("device is not connected")
        try:
            self._stream.write(command + "\r\n")
            self._stream.flush()
        except OSError as exc:
            raise DriverError(f"cannot write to device: {exc}") from exc

    def _expect(self, expected: str | None = None) -> str | None:
        """Read lines until OK; return the text after the last ``expected`` prefix."""
        if self._stream is None:
            raise DriverError("device is not connected")
        response = None
        while True:
            try:
                raw = self._stream.readline()
            except OSError as exc:
                raise DriverError(f"cannot read from device: {exc}") from exc
            if not raw:
                raise DriverError("device closed the connection")
            line = _strip_line(raw)
            if os.environ.get("AT_DEBUG"):
                sys.stdout.write(f"AT_DEBUG: {line}\r\n")
            if line == "ERROR":
                raise DriverError("modem answered ERROR")
            if line == "OK":
                return response
            if expected and line.startswith(expected):
                response = line[len(expected):]

    def connect(self) -> None:
        self._channel = 0
        if self._given_stream is not None:
            self._stream = self._given_stream
        else:
            device = self._device or os.environ.get("AT_DEVICE") or DEFAULT_DEVICE
            try:
                self._stream = open(device, "r+", newline="", encoding="latin-1")
            except OSError as exc:
                raise DriverError(f"Failed to open device: {device}") from exc
        for command in ("AT+CCHO", "AT+CCHC", "AT+CGLA"):
            self._send(f"{command}=?")
            try:
                self._expect()
            except DriverError as exc:
                raise DriverError(f"Device missing {command} support") from exc

    def disconnect(self) -> None:
        if self._stream is not None:
            self._stream.close()
        self._stream = None
        self._channel = 0

    def logic_channel_open(self, aid: bytes) -> int:
        if self._channel:
            return self._channel
        for channel in range(1, 5):
            self._send(f"AT+CCHC={channel}")
            try:
                self._expect()
            except DriverError:
                pass
        self._send(f'AT+CCHO="{bytes(aid).hex().upper()}"')
        response = self._expect("+CCHO: ")
        if response is None:
            raise DriverError("modem did not report a channel")
        self._channel = _atoi(response)
        return self._channel

    def logic_channel_close(self, channel: int) -> None:
        if not self._channel:
            return
        self._send(f"AT+CCHC={self._channel}")
        try:
            self._expect()
        except DriverError:
            pass

    def transmit(self, tx: bytes) -> bytes:
        if not self._channel:
            raise DriverError("no logical channel is open")
        data = bytes(tx)
        self._send(f'AT+CGLA={self._channel},{len(data) * 2},"{data.hex().upper()}"')
        response = self._expect("+CGLA: ")
        if response is None:
            raise DriverError("modem returned no APDU response")
        tokens = [token for token in response.split(",") if token]
        if len(tokens) < 2:
            raise DriverError("malformed +CGLA response")
        hexstr = tokens[1]
        if hexstr.startswith('"'):
            hexstr = hexstr[1:]
        hexstr = hexstr.split('"', 1)[0]
        try:
            return bytes.fromhex(hexstr)
        except ValueError as exc:
            raise DriverError("APDU response is not hex") from exc