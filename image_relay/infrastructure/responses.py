from __future__ import annotations

import io

from flask import Response
from PIL import Image

from ..errors import EncodeError

# Modes the JPEG encoder accepts as-is.
_JPEG_MODES = {"RGB", "L", "CMYK"}


def encode_jpeg(img: Image.Image, quality: int = 75) -> bytes:
    buffer = io.BytesIO()
    try:
        if img.mode not in _JPEG_MODES:
            img = img.convert("RGB")
        img.save(buffer, "JPEG", quality=quality)
    except (OSError, ValueError, KeyError) as exc:
        raise EncodeError(f"unable to encode image: {exc}") from exc
    return buffer.getvalue()


def send_jpeg(data: bytes) -> Response:
    response = Response(data, mimetype="image/jpeg")
    response.headers["Content-Length"] = str(len(data))
    return response
