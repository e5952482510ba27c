"""Organic Groups membership core."""

from .config import OgSettings
from .services import OgServices

__version__ = "0.1.0"

__all__ = ["OgServices", "OgSettings", "__version__"]
