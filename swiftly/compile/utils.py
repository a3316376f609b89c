"""Utility functions for building programs."""

from __future__ import annotations

import shutil
from pathlib import Path

from swiftly.data import ProgramReference


def staged_source_name(program: ProgramReference, source_extension: str) -> str:
    """Name of the staged copy of an extensionless source.

    Examples
    --------
    >>> staged_source_name(program, "swift")  # program.base_name == "hello"
    'hello.swift'
    """
    return f"{program.base_name}.{source_extension.lstrip('.')}"


def stage_source(program: ProgramReference, directory: Path, source_extension: str) -> Path:
    """Copy the program's source into ``directory`` under a name the compiler recognizes.

    Compilers refuse sources without a known extension, so the staged copy is named
    ``<base_name>.<source_extension>``. Only the content is copied.

    Parameters
    ----------
    program : ProgramReference
        The resolved program.
    directory : Path
        The directory the staged copy is written to. It must exist.
    source_extension : str
        The extension to append, without the leading dot.

    Returns
    -------
    Path
        Path to the staged copy.
    """
    staged = directory / staged_source_name(program, source_extension)
    shutil.copyfile(program.path, staged)
    return staged
