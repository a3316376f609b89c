"""Data layer with strongly-typed models."""

from .key import CacheKey
from .program import ProgramReference
from .utils import FrozenModel, NonEmptyString

__all__ = [
    "CacheKey",
    "FrozenModel",
    "NonEmptyString",
    "ProgramReference",
]
