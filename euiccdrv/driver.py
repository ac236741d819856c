"""Registry of transport drivers and selection of an APDU/HTTP pair."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from euiccdrv.apdu_at import AtApduDriver
from euiccdrv.apdu_stdio import StdioApduDriver
from euiccdrv.http_client import UrllibHttpDriver
from euiccdrv.http_stdio import StdioHttpDriver
from euiccdrv.interface import ApduDriver, DriverError, DriverType, HttpDriver

DRIVERS: tuple[type[ApduDriver] | type[HttpDriver], ...] = (
    AtApduDriver,
    UrllibHttpDriver,
    StdioApduDriver,
    StdioHttpDriver,
)


def find_driver(driver_type: DriverType, name: str | None):
    """Return the driver class of ``driver_type`` called ``name``.

    With no name the first driver of that type is chosen. Returns None
    when nothing matches.
    """
    for driver in DRIVERS:
        if driver.driver_type is not driver_type:
            continue
        if name is None or driver.name == name:
            return driver
    return None


@dataclass
class DriverSet:
    """An initialised APDU driver together with an HTTP driver."""

    apdu: ApduDriver
    http: HttpDriver

    def close(self) -> None:
        """Release both drivers."""
        self.apdu.close()
        self.http.close()

    def main_apdu(self, argv: Sequence[str]) -> int:
        """Run the APDU driver's own command."""
        return self.apdu.main(argv)

    def main_http(self, argv: Sequence[str]) -> int:
        """Run the HTTP driver's own command."""
        return self.http.main(argv)

    def __enter__(self) -> DriverSet:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def init_drivers(apdu_name: str | None, http_name: str | None) -> DriverSet:
    """Find and initialise the named drivers, or the defaults when None."""
    apdu_cls = find_driver(DriverType.APDU, apdu_name)
    if apdu_cls is None:
        raise DriverError("No APDU driver found")
    http_cls = find_driver(DriverType.HTTP, http_name)
    if http_cls is None:
        raise DriverError("No HTTP driver found")
    try:
        apdu = apdu_cls()
    except (DriverError, OSError) as exc:
        raise DriverError("APDU driver init failed") from exc
    try:
        http = http_cls()
    except (DriverError, OSError) as exc:
        apdu.close()
        raise DriverError("HTTP driver init failed") from exc
    return DriverSet(apdu=apdu, http=http)