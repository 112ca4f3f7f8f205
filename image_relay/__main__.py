"""Entry point for running the image server as a module."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace

from .app import create_app
from .catalog import load_catalog
from .config import ServerSettings, configure_logging
from .errors import CatalogLoadError


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve a directory of images over HTTP")
    parser.add_argument("--images", help="Directory of source images")
    parser.add_argument("--host", help="Listen address")
    parser.add_argument("--port", type=int, help="Listen port")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    settings = ServerSettings.from_env()
    overrides = {
        "image_dir": args.images,
        "host": args.host,
        "port": args.port,
    }
    settings = replace(settings, **{k: v for k, v in overrides.items() if v is not None})

    log = configure_logging(settings.log_level)
    try:
        catalog = load_catalog(settings.image_dir)
    except CatalogLoadError as exc:
        log.error("Quitting due to errors: %s", exc)
        return 1

    app = create_app(catalog, settings)
    log.info("Listening on endpoint %s:%d", settings.host, settings.port)
    app.run(host=settings.host, port=settings.port, debug=False, threaded=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
