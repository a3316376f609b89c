"""Cache subsystem package.

The cache maps a :class:`~swiftly.data.CacheKey` to a directory holding one compiled artifact::

    <cache_root>/<base_name>/<timestamp>/<base_name>

It includes:
- derive_cache_key: Computes the key of a resolved program
- CacheStore: Lookup, registration and pruning of cache entries
"""

from .key import derive_cache_key
from .store import CacheStore

__all__ = ["CacheStore", "derive_cache_key"]
