"""Shared fixtures for the image relay tests."""

import io

import pytest
from PIL import Image

from image_relay.catalog import load_catalog
from image_relay.config import ClientSettings, DnsServerAddress


def make_image(size, color=(200, 40, 40), mode="RGB"):
    return Image.new(mode, size, color)


@pytest.fixture
def encode():
    """Encode a solid image of the given size in the given format."""

    def build(size=(8, 8), fmt="JPEG", color=(10, 120, 240)):
        buffer = io.BytesIO()
        make_image(size, color).save(buffer, fmt)
        return buffer.getvalue()

    return build


@pytest.fixture
def image_dir(tmp_path):
    """Directory with three images of distinct sizes, in scan order a, b, c."""
    directory = tmp_path / "images"
    directory.mkdir()
    make_image((10, 10)).save(directory / "a.png")
    make_image((20, 12), color=(0, 255, 0)).save(directory / "b.jpg")
    make_image((30, 14), color=(0, 0, 255), mode="RGB").convert("P").save(directory / "c.gif")
    return directory


@pytest.fixture
def catalog(image_dir):
    return load_catalog(image_dir)


@pytest.fixture
def client_settings():
    def build(**overrides):
        values = dict(
            server_name="webserver.demo.com",
            server_port=32612,
            dns_server=DnsServerAddress("192.168.0.199", 53),
            dns_timeout_ms=5000,
            initial_wait=0,
            poll_interval=0,
            connect_timeout=5.0,
            read_timeout=10.0,
            on_fetch_error="continue",
            window_width=240,
            window_height=240,
            log_level="INFO",
        )
        values.update(overrides)
        return ClientSettings(**values)

    return build
