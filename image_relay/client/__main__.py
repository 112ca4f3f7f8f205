"""Entry point for the polling image client."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace

from ..config import ClientSettings, DnsServerAddress, configure_logging
from ..infrastructure.network import FetchClient
from .display import LatestImageSlot, placeholder_image
from .poller import FetchErrorPolicy, PollingLoop


def show_window(slot: LatestImageSlot, settings: ClientSettings) -> None:
    from .window import run_window

    run_window(slot, settings.window_width, settings.window_height)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Poll an image server and display the images")
    parser.add_argument("--server", help="HTTP server name")
    parser.add_argument("--port", type=int, help="HTTP server port")
    parser.add_argument("--dns", type=DnsServerAddress.parse, help="Custom DNS server with port")
    parser.add_argument(
        "--on-fetch-error",
        choices=[policy.value for policy in FetchErrorPolicy],
        help="Keep polling or stop after a failed fetch",
    )
    parser.add_argument("--headless", action="store_true", help="Poll without opening a window")
    parser.add_argument("--iterations", type=int, help="Stop after this many polls")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    settings = ClientSettings.from_env()
    overrides = {
        "server_name": args.server,
        "server_port": args.port,
        "dns_server": args.dns,
        "on_fetch_error": args.on_fetch_error,
    }
    settings = replace(settings, **{k: v for k, v in overrides.items() if v is not None})

    log = configure_logging(settings.log_level)
    log.info("Will connect to %s using DNS %s", settings.base_url, settings.dns_server)

    slot = LatestImageSlot(placeholder_image(settings.window_width, settings.window_height))
    with FetchClient(
        settings.dns_server,
        dns_timeout_ms=settings.dns_timeout_ms,
        connect_timeout=settings.connect_timeout,
        read_timeout=settings.read_timeout,
    ) as client:
        loop = PollingLoop(client, slot, settings)
        if args.headless:
            try:
                loop.run(args.iterations)
            except KeyboardInterrupt:
                pass
            return 0

        loop.start(args.iterations)
        try:
            # The window outlives a stopped loop and keeps the last image.
            show_window(slot, settings)
        except KeyboardInterrupt:
            pass
        finally:
            loop.stop(timeout=1.0)
    return 0


if __name__ == "__main__":
    sys.exit(main())
