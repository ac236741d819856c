"""HTTP driver built on the standard library's urllib."""

from __future__ import annotations

import http.client
import ssl
import urllib.error
import urllib.request
from collections.abc import Sequence

from euiccdrv.interface import DriverError, HttpDriver


class _NoRedirect(urllib.request.HTTPRedirectHandler):
    """Hands a redirect response back as an HTTPError instead of following it."""

    def redirect_request(self, req, fp, code, msg, headers, newurl):
        raise urllib.error.HTTPError(req.full_url, code, msg, headers, fp)


class UrllibHttpDriver(HttpDriver):
    """Performs requests directly, without verifying TLS certificates.

    A body turns the request into a POST; redirects are not followed and
    every status code is handed back to the caller.
    """

    name = "urllib"

    def __init__(self, timeout: float | None = None) -> None:
        context = ssl.create_default_context()
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
        self._timeout = timeout
        self._opener = urllib.request.build_opener(
            urllib.request.HTTPSHandler(context=context), _NoRedirect()
        )

    def transmit(self, url: str, tx: bytes | None, headers: Sequence[str]) -> tuple[int, bytes]:
        request = urllib.request.Request(
            url,
            data=None if tx is None else bytes(tx),
            method="GET" if tx is None else "POST",
        )
        for header in headers:
            name, _, value = header.partition(":")
            request.add_header(name.strip(), value.strip())
        try:
            with self._opener.open(request, timeout=self._timeout) as response:
                return response.status, response.read()
        except urllib.error.HTTPError as exc:
            with exc:
                return exc.code, exc.read()
        except (urllib.error.URLError, http.client.HTTPException, OSError) as exc:
            raise DriverError(f"request failed: {exc}") from exc