"""Application package exports."""

from .app import APP_VERSION, create_app
from .catalog import ImageCatalog, load_catalog
from . import client, infrastructure

__version__ = APP_VERSION

__all__ = [
    "APP_VERSION",
    "__version__",
    "create_app",
    "ImageCatalog",
    "load_catalog",
    "client",
    "infrastructure",
]
