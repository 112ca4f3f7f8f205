"""In-memory image catalog served by the lookup handler.

The catalog is built once from a directory and never mutated afterwards, so
request handlers may read it concurrently without locking.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, Optional, Sequence, Tuple

from PIL import Image

from .errors import CatalogLoadError, EmptyCatalogError

logger = logging.getLogger(__name__)

CatalogEntry = Optional[Image.Image]


class ImageCatalog(Sequence[CatalogEntry]):
    """Ordered, immutable sequence of decoded images.

    Entries whose file failed to decode are ``None`` placeholders so every
    other image keeps the index given by the directory scan.
    """

    def __init__(self, entries: Iterable[CatalogEntry], names: Iterable[str] = ()) -> None:
        self._entries: Tuple[CatalogEntry, ...] = tuple(entries)
        self._names: Tuple[str, ...] = tuple(names)
        if not any(entry is not None for entry in self._entries):
            raise EmptyCatalogError("catalog holds no decodable image")

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index):
        return self._entries[index]

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self._entries)

    @property
    def names(self) -> Tuple[str, ...]:
        return self._names

    @property
    def unavailable(self) -> int:
        return sum(1 for entry in self._entries if entry is None)

    def index_for(self, number: int) -> int:
        # Wrap instead of rejecting out-of-range numbers.
        return number % len(self._entries)

    def entry(self, number: int) -> CatalogEntry:
        return self._entries[self.index_for(number)]


def _decode_file(path: Path) -> Image.Image:
    with Image.open(path) as img:
        img.load()
        return img.copy()


def load_catalog(directory: str | os.PathLike) -> ImageCatalog:
    directory = Path(directory)
    try:
        paths = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        logger.error("Failed to read directory %s: %s", directory, exc)
        raise CatalogLoadError(f"unable to read image directory {directory}: {exc}") from exc

    entries = []
    names = []
    for path in paths:
        if path.is_dir():
            logger.debug("Skipping sub-directory %s", path)
            continue
        try:
            image: CatalogEntry = _decode_file(path)
        except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as exc:
            logger.warning("Failed to convert file %s to image: %s", path, exc)
            image = None
        entries.append(image)
        names.append(path.name)

    catalog = ImageCatalog(entries, names)
    logger.info(
        "Collected %d images from %s (%d unavailable)",
        len(catalog),
        directory,
        catalog.unavailable,
    )
    return catalog
