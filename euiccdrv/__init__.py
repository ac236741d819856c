"""eUICC helpers: TLV and base64 utilities, ES10a commands, and APDU/HTTP drivers."""

__version__ = "0.1.0"

__all__ = [
    "apdu_at",
    "apdu_stdio",
    "base64",
    "derutil",
    "driver",
    "es10a",
    "http_client",
    "http_stdio",
    "interface",
]