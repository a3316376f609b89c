"""Configuration for a swiftly invocation."""

from __future__ import annotations

from pathlib import Path
from typing import List, Literal

from pydantic import BaseModel, Field, field_validator

from swiftly.env import (
    get_swiftly_cache_path,
    get_swiftly_compiler,
    get_swiftly_compiler_flags,
    get_swiftly_interpreter,
    get_swiftly_log_level,
    get_swiftly_source_extension,
)

from .data import NonEmptyString


class SwiftlyConfig(BaseModel):
    """Settings shared by the cache store, the builder and the launcher.

    Components receive these values explicitly; only ``from_env`` reads the environment.
    """

    cache_path: Path = Field(default_factory=get_swiftly_cache_path)
    """The cache root. Holds one directory per program base name."""
    compiler: NonEmptyString = "swiftc"
    """The compiler executable, resolved on the execution search path if not a path."""
    compiler_flags: List[str] = Field(default_factory=list)
    """Extra flags passed to the compiler before the output and source paths."""
    interpreter: NonEmptyString = "swift"
    """The interpreter executable used when no caching is applicable."""
    source_extension: NonEmptyString = "swift"
    """Extension (without the dot) appended to staged copies of extensionless sources."""
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    """Level of the ``swiftly`` logger."""

    @field_validator("source_extension")
    @classmethod
    def _strip_dot(cls, value: str) -> str:
        value = value.lstrip(".")
        if not value:
            raise ValueError("source_extension must contain at least one character besides '.'")
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper() if isinstance(value, str) else value

    @classmethod
    def from_env(cls) -> "SwiftlyConfig":
        """Build a config from the SWIFTLY_* environment variables.

        Returns
        -------
        SwiftlyConfig
            The validated config.

        Raises
        ------
        pydantic.ValidationError
            If a variable holds an invalid value (e.g. an unknown log level).
        """
        return cls(
            cache_path=get_swiftly_cache_path(),
            compiler=get_swiftly_compiler(),
            compiler_flags=get_swiftly_compiler_flags(),
            interpreter=get_swiftly_interpreter(),
            source_extension=get_swiftly_source_extension(),
            log_level=get_swiftly_log_level(),
        )
