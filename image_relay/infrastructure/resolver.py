"""Name resolution pinned to a single DNS server.

``DnsResolver`` never consults the operating system resolver configuration.
``ResolverBoundAdapter`` plugs it into requests so that both the lookup and the
TCP connect of every outbound connection go through it.
"""

from __future__ import annotations

import ipaddress
import logging
import socket
from typing import Type

import dns.exception
import dns.resolver
from requests.adapters import HTTPAdapter
from urllib3.connection import HTTPConnection, HTTPSConnection
from urllib3.connectionpool import HTTPConnectionPool, HTTPSConnectionPool
from urllib3.exceptions import ConnectTimeoutError, NameResolutionError, NewConnectionError
from urllib3.util.connection import create_connection

from ..config import DnsServerAddress
from ..errors import DnsResolutionError

logger = logging.getLogger(__name__)

DEFAULT_DNS_TIMEOUT_MS = 5000


class DnsResolver:
    def __init__(
        self,
        address: DnsServerAddress | str,
        timeout_ms: int = DEFAULT_DNS_TIMEOUT_MS,
    ) -> None:
        if isinstance(address, str):
            address = DnsServerAddress.parse(address)
        if timeout_ms <= 0:
            raise ValueError("DNS timeout must be positive")
        self.address = address
        self.timeout_ms = timeout_ms
        self._resolver = dns.resolver.Resolver(configure=False)
        # The port must be set first; nameservers pick it up when assigned.
        self._resolver.port = address.port
        self._resolver.nameservers = [address.host]
        self._resolver.timeout = timeout_ms / 1000.0
        self._resolver.lifetime = timeout_ms / 1000.0

    def resolve(self, hostname: str) -> str:
        """Return the first address for ``hostname`` (A first, then AAAA)."""

        hostname = hostname.rstrip(".")
        try:
            return str(ipaddress.ip_address(hostname))
        except ValueError:
            pass

        try:
            try:
                answer = self._resolver.resolve(hostname, "A")
            except dns.resolver.NoAnswer:
                answer = self._resolver.resolve(hostname, "AAAA")
        except dns.exception.Timeout as exc:
            raise DnsResolutionError(
                f"DNS server {self.address} did not answer for {hostname} "
                f"within {self.timeout_ms} ms"
            ) from exc
        except dns.exception.DNSException as exc:
            raise DnsResolutionError(
                f"DNS server {self.address} could not resolve {hostname}: {exc}"
            ) from exc

        address = answer[0].address
        logger.debug("Resolved %s to %s via %s", hostname, address, self.address)
        return address


class _ResolverBoundConnectionMixin:
    resolver: DnsResolver

    def _new_conn(self) -> socket.socket:
        try:
            address = self.resolver.resolve(self._dns_host)
        except DnsResolutionError as exc:
            raise NameResolutionError(self.host, self, exc) from exc

        try:
            return create_connection(
                (address, self.port),
                self.timeout,
                source_address=self.source_address,
                socket_options=self.socket_options,
            )
        except socket.timeout as exc:
            raise ConnectTimeoutError(
                self,
                f"Connection to {self.host} ({address}) timed out. "
                f"(connect timeout={self.timeout})",
            ) from exc
        except OSError as exc:
            raise NewConnectionError(
                self, f"Failed to establish a new connection to {address}: {exc}"
            ) from exc


class ResolverBoundHTTPConnection(_ResolverBoundConnectionMixin, HTTPConnection):
    pass


class ResolverBoundHTTPSConnection(_ResolverBoundConnectionMixin, HTTPSConnection):
    pass


def _bound_pool_class(
    pool_cls: Type[HTTPConnectionPool],
    connection_cls: type,
    resolver: DnsResolver,
) -> Type[HTTPConnectionPool]:
    bound_connection = type(connection_cls.__name__, (connection_cls,), {"resolver": resolver})
    return type(pool_cls.__name__, (pool_cls,), {"ConnectionCls": bound_connection})


class ResolverBoundAdapter(HTTPAdapter):
    """Transport adapter whose connections resolve through ``resolver`` only."""

    __attrs__ = HTTPAdapter.__attrs__ + ["_resolver"]

    def __init__(self, resolver: DnsResolver, **kwargs) -> None:
        # ``HTTPAdapter.__init__`` builds the pool manager, which needs the resolver.
        self._resolver = resolver
        super().__init__(**kwargs)

    @property
    def resolver(self) -> DnsResolver:
        return self._resolver

    def init_poolmanager(self, connections, maxsize, block=False, **pool_kwargs):
        super().init_poolmanager(connections, maxsize, block=block, **pool_kwargs)
        self.poolmanager.pool_classes_by_scheme = {
            "http": _bound_pool_class(
                HTTPConnectionPool, ResolverBoundHTTPConnection, self._resolver
            ),
            "https": _bound_pool_class(
                HTTPSConnectionPool, ResolverBoundHTTPSConnection, self._resolver
            ),
        }
