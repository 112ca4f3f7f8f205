"""Hand-off between the polling thread and whatever renders the images."""

from __future__ import annotations

import threading
from typing import Optional, Protocol

from PIL import Image


class ImageSink(Protocol):
    def show(self, image: Image.Image) -> None:
        ...


class LatestImageSlot:
    """Single-slot, lock-guarded cell holding the newest decoded image.

    The polling thread calls ``show``; the render loop calls ``take``. An image
    that was never taken is replaced by the next one.
    """

    def __init__(self, initial: Optional[Image.Image] = None) -> None:
        self._lock = threading.Lock()
        self._pending: Optional[Image.Image] = initial
        self._latest: Optional[Image.Image] = initial
        self._shown = 0

    def show(self, image: Image.Image) -> None:
        with self._lock:
            self._pending = image
            self._latest = image
            self._shown += 1

    def take(self) -> Optional[Image.Image]:
        with self._lock:
            image, self._pending = self._pending, None
            return image

    def peek(self) -> Optional[Image.Image]:
        with self._lock:
            return self._latest

    @property
    def shown(self) -> int:
        with self._lock:
            return self._shown


def placeholder_image(width: int, height: int) -> Image.Image:
    return Image.new("RGB", (width, height), (0, 0, 255))
