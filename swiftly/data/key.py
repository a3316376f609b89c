"""Cache key identifying one compiled artifact."""

from pathlib import PurePath

from .utils import FrozenModel, NonEmptyString


class CacheKey(FrozenModel):
    """Key of a cache entry: the program base name and its modification timestamp.

    Two byte-identical files with different modification times map to different keys, and two
    different files with the same base name saved within the same second map to the same key.
    """

    base_name: NonEmptyString
    """Base name of the program the artifact was compiled from."""
    timestamp: int
    """Modification time of the source, in whole seconds since the epoch."""

    def relative_dir(self) -> PurePath:
        """The entry directory relative to the cache root: ``<base_name>/<timestamp>``."""
        return PurePath(self.base_name, str(self.timestamp))

    def __str__(self) -> str:
        return f"{self.base_name}@{self.timestamp}"
