from __future__ import annotations

import io
import logging
from typing import Callable, Optional, Type

import requests
from PIL import Image

from ..config import DnsServerAddress
from ..errors import (
    BadStatusError,
    DecodeError,
    DnsResolutionError,
    FetchError,
    NetworkUnreachable,
    ResponseReadError,
)
from .resolver import DEFAULT_DNS_TIMEOUT_MS, DnsResolver, ResolverBoundAdapter

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], requests.Session]

USER_AGENT = "image-relay/1.0"


def _find_in_chain(exc: BaseException, wanted: Type[BaseException]) -> Optional[BaseException]:
    """Search causes, contexts, ``reason`` attributes and args of ``exc`` for ``wanted``."""

    seen: set[int] = set()
    pending: list[Optional[BaseException]] = [exc]
    while pending:
        current = pending.pop()
        if current is None or id(current) in seen:
            continue
        seen.add(id(current))
        if isinstance(current, wanted):
            return current
        pending.append(current.__cause__)
        pending.append(current.__context__)
        reason = getattr(current, "reason", None)
        if isinstance(reason, BaseException):
            pending.append(reason)
        pending.extend(arg for arg in current.args if isinstance(arg, BaseException))
    return None


class FetchClient:
    """HTTP client whose every connection resolves through one DNS server.

    The client is created once and reused; it owns its session and adapter so
    nothing process-wide is reconfigured.
    """

    def __init__(
        self,
        dns_server: DnsServerAddress | str,
        *,
        dns_timeout_ms: int = DEFAULT_DNS_TIMEOUT_MS,
        connect_timeout: float = 5.0,
        read_timeout: float = 10.0,
        session_factory: SessionFactory | None = None,
    ) -> None:
        self.resolver = DnsResolver(dns_server, dns_timeout_ms)
        self._timeout = (connect_timeout, read_timeout)
        self._session_factory = session_factory or requests.Session
        self._session = self._create_session()

    def _create_session(self) -> requests.Session:
        session = self._session_factory()
        # Proxies from the environment would bypass the pinned resolver.
        session.trust_env = False
        adapter = ResolverBoundAdapter(self.resolver)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        session.headers.update({"User-Agent": USER_AGENT})
        return session

    def fetch_bytes(self, url: str) -> bytes:
        try:
            response = self._session.get(url, timeout=self._timeout, stream=True)
        except requests.ConnectionError as exc:
            dns_failure = _find_in_chain(exc, DnsResolutionError)
            if dns_failure is not None:
                raise DnsResolutionError(str(dns_failure)) from exc
            raise NetworkUnreachable(f"unable to connect to http server: {exc}") from exc
        except requests.Timeout as exc:
            raise ResponseReadError(f"timed out waiting for http server response: {exc}") from exc
        except requests.RequestException as exc:
            raise FetchError(f"HTTP GET {url} failed: {exc}") from exc

        with response:
            if not response.ok:
                raise BadStatusError(
                    response.status_code,
                    f"http server answered {response.status_code} {response.reason}",
                )
            try:
                return response.content
            except requests.RequestException as exc:
                raise ResponseReadError(f"unable to read http server response: {exc}") from exc

    def fetch_image(self, url: str) -> Image.Image:
        data = self.fetch_bytes(url)
        try:
            image = Image.open(io.BytesIO(data), formats=["JPEG"])
            image.load()
        except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as exc:
            raise DecodeError(f"image decode failed: {exc}") from exc
        return image

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "FetchClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
