"""Exception hierarchy shared by the server and the client."""

from __future__ import annotations


class ImageRelayError(Exception):
    """Base class for every error raised by this package."""


class FetchError(ImageRelayError):
    """Fetching bytes from the image server failed."""


class NetworkUnreachable(FetchError):
    """No connection could be established to the image server."""


class DnsResolutionError(NetworkUnreachable):
    """The configured DNS server did not resolve the host in time."""


class ResponseReadError(FetchError):
    """The connection was established but the body could not be read."""


class BadStatusError(FetchError):
    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code


class DecodeError(ImageRelayError):
    """The payload is not a decodable image."""


class CatalogLoadError(ImageRelayError):
    """The image directory could not be read."""


class EmptyCatalogError(CatalogLoadError):
    """The image directory holds no decodable image."""


class EncodeError(ImageRelayError):
    """A catalog image could not be re-encoded for the wire."""
