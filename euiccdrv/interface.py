"""Base classes for APDU and HTTP transport drivers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from enum import Enum
from typing import ClassVar


class DriverType(Enum):
    """Kind of transport a driver provides."""

    APDU = "apdu"
    HTTP = "http"


class DriverError(Exception):
    """Raised when a driver cannot perform an operation."""


def _check_argv(argv: Sequence[str]) -> None:
    for arg in argv:
        if not isinstance(arg, str):
            raise TypeError(f"driver arguments must be strings, got {type(arg).__name__}")


class ApduDriver(ABC):
    """A transport that exchanges APDUs with an eUICC."""

    name: ClassVar[str] = ""
    driver_type: ClassVar[DriverType] = DriverType.APDU

    @abstractmethod
    def connect(self) -> None:
        """Open the connection to the card."""

    @abstractmethod
    def disconnect(self) -> None:
        """Close the connection to the card."""

    @abstractmethod
    def logic_channel_open(self, aid: bytes) -> int:
        """Open a logical channel selecting ``aid`` and return its number."""

    @abstractmethod
    def logic_channel_close(self, channel: int) -> None:
        """Close a logical channel."""

    @abstractmethod
    def transmit(self, tx: bytes) -> bytes:
        """Send a command APDU and return the response including status."""

    def main(self, argv: Sequence[str]) -> int:
        """Run a driver-specific command; the base driver has none and succeeds."""
        _check_argv(argv)
        return 0

    @property
    def closed(self) -> bool:
        """Whether :meth:`close` has been called."""
        return getattr(self, "_closed", False)

    def close(self) -> None:
        """Release resources held by the driver."""
        self._closed = True

    def __enter__(self) -> ApduDriver:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class HttpDriver(ABC):
    """A transport that performs HTTP requests to an SM-DP+ server."""

    name: ClassVar[str] = ""
    driver_type: ClassVar[DriverType] = DriverType.HTTP

    @abstractmethod
    def transmit(self, url: str, tx: bytes | None, headers: Sequence[str]) -> tuple[int, bytes]:
        """Send a request and return the status code and the response body."""

    def main(self, argv: Sequence[str]) -> int:
        """Run a driver-specific command; the base driver has none and succeeds."""
        _check_argv(argv)
        return 0

    @property
    def closed(self) -> bool:
        """Whether :meth:`close` has been called."""
        return getattr(self, "_closed", False)

    def close(self) -> None:
        """Release resources held by the driver."""
        self._closed = True

    def __enter__(self) -> HttpDriver:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()