"""Cache key derivation."""

from __future__ import annotations

from swiftly.data import CacheKey, ProgramReference


def derive_cache_key(program: ProgramReference) -> CacheKey:
    """Derive the cache key of a resolved program.

    The key is the program's base name and its modification time at second granularity. The
    file content is not read, so an unchanged file with a new modification time is recompiled.

    Parameters
    ----------
    program : ProgramReference
        The resolved program.

    Returns
    -------
    CacheKey
        The key ``(base_name, mtime)``.
    """
    return CacheKey(base_name=program.base_name, timestamp=program.mtime)
