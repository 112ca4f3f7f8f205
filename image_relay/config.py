import ipaddress
import logging
import os
from dataclasses import dataclass


@dataclass(frozen=True)
class DnsServerAddress:
    host: str
    port: int = 53

    @classmethod
    def parse(cls, value: str) -> "DnsServerAddress":
        """Parse ``host:port``, a bare ``host`` or ``[ipv6]:port``.

        The host must be an IP literal since the resolver is the thing that
        would otherwise be used to look it up.
        """

        value = value.strip()
        if value.startswith("["):
            host, sep, rest = value[1:].partition("]")
            if not sep or (rest and not rest.startswith(":")):
                raise ValueError(f"Invalid DNS server address: {value!r}")
            port_text = rest[1:] if rest else ""
        elif value.count(":") == 1:
            host, _, port_text = value.partition(":")
        else:
            host, port_text = value, ""

        try:
            ipaddress.ip_address(host)
        except ValueError:
            raise ValueError(f"DNS server host must be an IP address: {value!r}") from None

        if not port_text:
            return cls(host=host)
        if not port_text.isdigit() or not 0 < int(port_text) < 65536:
            raise ValueError(f"Invalid DNS server port: {value!r}")
        return cls(host=host, port=int(port_text))

    def __str__(self) -> str:
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


@dataclass(frozen=True)
class ServerSettings:
    image_dir: str
    host: str
    port: int
    jpeg_quality: int
    log_level: str

    @classmethod
    def from_env(cls) -> "ServerSettings":
        return cls(
            image_dir=os.getenv("IMAGE_DIR", "./images"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3333")),
            jpeg_quality=int(os.getenv("JPEG_QUALITY", "75")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


@dataclass(frozen=True)
class ClientSettings:
    server_name: str
    server_port: int
    dns_server: DnsServerAddress
    dns_timeout_ms: int
    initial_wait: float
    poll_interval: float
    connect_timeout: float
    read_timeout: float
    on_fetch_error: str
    window_width: int
    window_height: int
    log_level: str

    @classmethod
    def from_env(cls) -> "ClientSettings":
        return cls(
            server_name=os.getenv("SERVER_NAME", "webserver.demo.com"),
            server_port=int(os.getenv("SERVER_PORT", "32612")),
            dns_server=DnsServerAddress.parse(os.getenv("DNS_SERVER", "192.168.0.199:53")),
            dns_timeout_ms=int(os.getenv("DNS_TIMEOUT_MS", "5000")),
            initial_wait=float(os.getenv("INITIAL_WAIT", "2")),
            poll_interval=float(os.getenv("POLL_INTERVAL", "1")),
            connect_timeout=float(os.getenv("CONNECT_TIMEOUT", "5.0")),
            read_timeout=float(os.getenv("READ_TIMEOUT", "10.0")),
            on_fetch_error=os.getenv("ON_FETCH_ERROR", "continue").lower(),
            window_width=int(os.getenv("WINDOW_WIDTH", "240")),
            window_height=int(os.getenv("WINDOW_HEIGHT", "240")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    @property
    def base_url(self) -> str:
        return f"http://{self.server_name}:{self.server_port}"


def configure_logging(level: str = "INFO") -> logging.Logger:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return logging.getLogger("image-relay")
