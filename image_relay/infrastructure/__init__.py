"""Infrastructure helpers for networking and wire encoding."""

from .network import FetchClient
from .resolver import DnsResolver, ResolverBoundAdapter
from .responses import encode_jpeg, send_jpeg

__all__ = [
    "FetchClient",
    "DnsResolver",
    "ResolverBoundAdapter",
    "encode_jpeg",
    "send_jpeg",
]
