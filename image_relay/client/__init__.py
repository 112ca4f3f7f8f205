"""Polling client: fetch loop and the hand-off to the renderer."""

from .display import ImageSink, LatestImageSlot, placeholder_image
from .poller import FetchErrorPolicy, PollingLoop

__all__ = [
    "ImageSink",
    "LatestImageSlot",
    "placeholder_image",
    "FetchErrorPolicy",
    "PollingLoop",
]
