"""OpenCV window that renders whatever lands in a ``LatestImageSlot``."""

from __future__ import annotations

from typing import Callable

import cv2
import numpy as np
from PIL import Image

from .display import LatestImageSlot, placeholder_image

QUIT_KEYS = (ord("q"), 27)


def to_bgr(image: Image.Image) -> np.ndarray:
    return cv2.cvtColor(np.asarray(image.convert("RGB")), cv2.COLOR_RGB2BGR)


def run_window(
    slot: LatestImageSlot,
    width: int,
    height: int,
    *,
    title: str = "Demo",
    keep_running: Callable[[], bool] = lambda: True,
    refresh_ms: int = 50,
) -> None:
    """Blocking render loop; must run on the main thread."""

    cv2.namedWindow(title, cv2.WINDOW_NORMAL)
    cv2.resizeWindow(title, width, height)
    frame = to_bgr(slot.peek() or placeholder_image(width, height))
    try:
        while keep_running():
            image = slot.take()
            if image is not None:
                frame = to_bgr(image)
            cv2.imshow(title, frame)
            if cv2.waitKey(refresh_ms) & 0xFF in QUIT_KEYS:
                break
            if cv2.getWindowProperty(title, cv2.WND_PROP_VISIBLE) < 1:
                break
    finally:
        cv2.destroyAllWindows()
