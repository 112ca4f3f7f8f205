from __future__ import annotations

import logging

from flask import Flask, current_app, jsonify, request

from .catalog import ImageCatalog
from .config import ServerSettings
from .errors import EncodeError
from .infrastructure.responses import encode_jpeg, send_jpeg

APP_VERSION = "1.0.0"

logger = logging.getLogger(__name__)

MISSING_NUMBER = "No image number in request"
BAD_NUMBER = "Bad image number in request"

_TEXT = {"Content-Type": "text/plain; charset=utf-8"}


def parse_image_number(raw: str) -> int:
    # Only plain non-negative decimal numbers are accepted.
    if not raw or not (raw.isascii() and raw.isdigit()):
        raise ValueError(f"not a non-negative integer: {raw!r}")
    return int(raw)


def create_app(catalog: ImageCatalog, settings: ServerSettings | None = None) -> Flask:
    settings = settings or ServerSettings.from_env()
    app = Flask(__name__)
    app.config["IMAGE_CATALOG"] = catalog
    app.config["JPEG_QUALITY"] = settings.jpeg_quality

    @app.route("/")
    def image_lookup():
        raw = request.args.get("image")
        if raw is None:
            return (MISSING_NUMBER, 400, _TEXT)
        try:
            number = parse_image_number(raw)
        except ValueError:
            return (BAD_NUMBER, 400, _TEXT)

        images: ImageCatalog = current_app.config["IMAGE_CATALOG"]
        index = images.index_for(number)
        img = images[index]
        if img is None:
            logger.warning("Image %d is unavailable", index)
            return ("Image unavailable", 500, _TEXT)

        try:
            data = encode_jpeg(img, current_app.config["JPEG_QUALITY"])
        except EncodeError as exc:
            logger.error("Unable to encode image %d: %s", index, exc)
            return ("Unable to encode image", 500, _TEXT)
        return send_jpeg(data)

    @app.route("/health")
    def health():
        images: ImageCatalog = current_app.config["IMAGE_CATALOG"]
        return jsonify(ok=True, images=len(images), unavailable=images.unavailable, version=APP_VERSION)

    return app
