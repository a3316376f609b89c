"""swiftly: run compiled-language source files like scripts, compiling each version once."""

from swiftly.cache import CacheStore, derive_cache_key
from swiftly.compile import Builder, BuildError, Compiler, Runnable, RunnableMetadata
from swiftly.config import SwiftlyConfig
from swiftly.data import CacheKey, ProgramReference
from swiftly.interpreter import Interpreter
from swiftly.launcher import Launcher
from swiftly.logging import configure_logging, get_logger
from swiftly.resolver import ResolutionError, resolve_program

__all__ = [
    # Main classes
    "Launcher",
    "SwiftlyConfig",
    # Cache
    "CacheKey",
    "CacheStore",
    "derive_cache_key",
    # Resolution
    "ProgramReference",
    "ResolutionError",
    "resolve_program",
    # Build
    "Builder",
    "BuildError",
    "Compiler",
    "Runnable",
    "RunnableMetadata",
    "Interpreter",
    # Logging
    "configure_logging",
    "get_logger",
]
