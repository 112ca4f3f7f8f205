from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Optional

from PIL import Image

from ..config import ClientSettings
from ..errors import DecodeError, DnsResolutionError, FetchError
from ..infrastructure.network import FetchClient
from .display import ImageSink

logger = logging.getLogger(__name__)


class FetchErrorPolicy(str, Enum):
    CONTINUE = "continue"
    STOP = "stop"


class PollingLoop:
    """Fetch a new image from the server on a fixed cadence.

    Iterations are strictly sequential and the counter grows by one per
    iteration, failed or not. Every decoded image is handed to ``sink``.
    """

    def __init__(
        self,
        client: FetchClient,
        sink: ImageSink,
        settings: ClientSettings,
        *,
        stop_event: Optional[threading.Event] = None,
    ) -> None:
        self._client = client
        self._sink = sink
        self._settings = settings
        self.policy = FetchErrorPolicy(settings.on_fetch_error)
        self._stop = stop_event or threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.counter = 0

    def build_url(self, counter: int) -> str:
        return f"{self._settings.base_url}?image={counter}"

    def lookup_server(self) -> Optional[str]:
        """Resolve the server name for the status line only."""

        try:
            return self._client.resolver.resolve(self._settings.server_name)
        except DnsResolutionError as exc:
            logger.warning("Error in DNS resolution: %s", exc)
            return None

    def poll_once(self) -> bool:
        self.counter += 1
        address = self.lookup_server() or "-"
        url = self.build_url(self.counter)
        try:
            image: Image.Image = self._client.fetch_image(url)
        except (FetchError, DecodeError) as exc:
            logger.info("%d: %s %s Error: %s", self.counter, self._settings.server_name, address, exc)
            return False

        self._sink.show(image)
        logger.info(
            "%d: %s %s Got image %dx%d",
            self.counter,
            self._settings.server_name,
            address,
            image.width,
            image.height,
        )
        return True

    def run(self, iterations: Optional[int] = None) -> int:
        """Poll until stopped; return the number of iterations performed."""

        done = 0
        if self._stop.wait(self._settings.initial_wait):
            return done
        while iterations is None or done < iterations:
            if self._stop.wait(self._settings.poll_interval):
                break
            ok = self.poll_once()
            done += 1
            if not ok and self.policy is FetchErrorPolicy.STOP:
                logger.error("Stopping after failed fetch at iteration %d", self.counter)
                break
        return done

    def start(self, iterations: Optional[int] = None) -> threading.Thread:
        if self._thread is not None and self._thread.is_alive():
            raise RuntimeError("polling loop already running")
        self._thread = threading.Thread(
            target=self.run, args=(iterations,), name="image-poller", daemon=True
        )
        self._thread.start()
        return self._thread

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()
