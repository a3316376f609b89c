"""Environment variables read by swiftly.

Every getter reads the environment at call time, so tests can override a variable with
``monkeypatch.setenv`` without reloading any module.
"""

from __future__ import annotations

import os
import shlex
from pathlib import Path
from typing import List


def get_swiftly_cache_path() -> Path:
    """Get the cache root from the environment variable SWIFTLY_CACHE_PATH.

    Returns
    -------
    Path
        The value of SWIFTLY_CACHE_PATH if set, otherwise ``~/.swiftly/cache``.
    """
    value = os.environ.get("SWIFTLY_CACHE_PATH")
    if value:
        return Path(value).expanduser()
    return Path.home() / ".swiftly" / "cache"


def get_swiftly_compiler() -> str:
    """Get the compiler executable from SWIFTLY_COMPILER. Default is ``swiftc``."""
    return os.environ.get("SWIFTLY_COMPILER") or "swiftc"


def get_swiftly_compiler_flags() -> List[str]:
    """Get extra compiler flags from SWIFTLY_COMPILER_FLAGS, split with shell quoting rules.

    Returns
    -------
    List[str]
        The flags, or an empty list if the variable is unset or empty.
    """
    return shlex.split(os.environ.get("SWIFTLY_COMPILER_FLAGS", ""))


def get_swiftly_interpreter() -> str:
    """Get the interpreter executable from SWIFTLY_INTERPRETER. Default is ``swift``."""
    return os.environ.get("SWIFTLY_INTERPRETER") or "swift"


def get_swiftly_source_extension() -> str:
    """Get the extension appended to staged sources from SWIFTLY_SOURCE_EXTENSION.

    Default is ``swift``. A leading dot is stripped.
    """
    return (os.environ.get("SWIFTLY_SOURCE_EXTENSION") or "swift").lstrip(".")


def get_swiftly_log_level() -> str:
    """Get the log level from SWIFTLY_LOG_LEVEL. Default is ``WARNING``."""
    return (os.environ.get("SWIFTLY_LOG_LEVEL") or "WARNING").upper()
