"""cachestore: encryption-aware, tenant-filtering key-value cache stores."""

from cachestore.version import __version__

__all__ = ["__version__"]
